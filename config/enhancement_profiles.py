"""
Static enhancement profile table

Loaded once at startup by services.profile_catalog.ProfileCatalog.from_config.
Tags are the string values of the enums in models.enums.
"""

NATURAL_PROFILE = {
    "name": "Natural",
    "description": "Subtle improvements maintaining authenticity",
    "mode": "natural",
    "intensity_multiplier": 0.8,
    "target_audience": "general",
    "average_processing_time": 1.5,
    "estimated_improvements": {
        "overall_quality": 0.15,
        "skin_appearance": 0.12,
        "eye_brightness": 0.10,
        "lighting": 0.08,
    },
    "enhancements": [
        {
            "type": "auto_enhance",
            "base_intensity": 0.3,
            "priority": 100,
            "adaptive_adjustments": [
                {"factor": "image_quality", "multiplier": 1.2, "threshold": 0.6, "condition": "lt"},
            ],
            "is_quick_processing": True,
            "processing_order": 1,
        },
        {
            "type": "skin_smoothing",
            "base_intensity": 0.2,
            "priority": 80,
            "adaptive_adjustments": [
                {"factor": "age", "multiplier": 1.5, "threshold": 0.6, "condition": "gt"},
                {"factor": "image_quality", "multiplier": 0.8, "threshold": 0.5, "condition": "lt"},
            ],
            "processing_order": 3,
        },
        {
            "type": "eye_brightening",
            "base_intensity": 0.25,
            "priority": 70,
            "is_quick_processing": True,
            "processing_order": 4,
        },
        {
            "type": "brightness",
            "base_intensity": 0.15,
            "priority": 90,
            "adaptive_adjustments": [
                {"factor": "lighting_quality", "multiplier": 2.0, "threshold": 0.5, "condition": "lt"},
            ],
            "is_quick_processing": True,
            "processing_order": 2,
        },
    ],
}

GLAM_PROFILE = {
    "name": "Glam",
    "description": "Enhanced beauty for special occasions",
    "mode": "glam",
    "intensity_multiplier": 1.2,
    "target_audience": "social",
    "average_processing_time": 3.0,
    "estimated_improvements": {
        "overall_quality": 0.25,
        "skin_appearance": 0.20,
        "eye_brightness": 0.18,
        "teeth_whiteness": 0.15,
        "lip_enhancement": 0.12,
        "color_vibrancy": 0.10,
    },
    "enhancements": [
        {
            "type": "auto_enhance",
            "base_intensity": 0.6,
            "priority": 100,
            "is_quick_processing": True,
            "processing_order": 1,
        },
        {
            "type": "skin_smoothing",
            "base_intensity": 0.4,
            "priority": 95,
            "adaptive_adjustments": [
                {"factor": "age", "multiplier": 1.3, "threshold": 0.5, "condition": "gt"},
            ],
            "processing_order": 3,
        },
        {
            "type": "eye_brightening",
            "base_intensity": 0.5,
            "priority": 90,
            "is_quick_processing": True,
            "processing_order": 4,
        },
        {
            "type": "teeth_whitening",
            "base_intensity": 0.3,
            "priority": 75,
            "processing_order": 5,
        },
        {
            "type": "lip_enhancement",
            "base_intensity": 0.25,
            "priority": 70,
            "processing_order": 6,
        },
        {
            "type": "contrast",
            "base_intensity": 0.2,
            "priority": 85,
            "is_quick_processing": True,
            "processing_order": 2,
        },
        {
            "type": "saturation",
            "base_intensity": 0.15,
            "priority": 80,
            "is_quick_processing": True,
            "processing_order": 2,
        },
    ],
}

HD_PROFILE = {
    "name": "HD",
    "description": "High-definition clarity and detail enhancement",
    "mode": "hd",
    "intensity_multiplier": 1.0,
    "target_audience": "professional",
    "average_processing_time": 2.5,
    "applicability_conditions": [
        {"factor": "image_quality", "threshold": 0.5, "condition": "gt"},
    ],
    "estimated_improvements": {
        "clarity": 0.30,
        "detail": 0.25,
        "sharpness": 0.22,
        "overall_quality": 0.20,
        "skin_texture": 0.15,
    },
    "enhancements": [
        {
            "type": "clarity",
            "base_intensity": 0.6,
            "priority": 100,
            "adaptive_adjustments": [
                {"factor": "image_quality", "multiplier": 1.5, "threshold": 0.7, "condition": "gt"},
            ],
            "is_quick_processing": True,
            "processing_order": 1,
        },
        {
            "type": "auto_enhance",
            "base_intensity": 0.4,
            "priority": 95,
            "is_quick_processing": True,
            "processing_order": 2,
        },
        {
            "type": "skin_smoothing",
            "base_intensity": 0.3,
            "priority": 85,
            "adaptive_adjustments": [
                {"factor": "image_quality", "multiplier": 0.7, "threshold": 0.8, "condition": "gt"},
            ],
            "processing_order": 4,
        },
        {
            "type": "eye_brightening",
            "base_intensity": 0.4,
            "priority": 80,
            "is_quick_processing": True,
            "processing_order": 5,
        },
        {
            "type": "contrast",
            "base_intensity": 0.25,
            "priority": 90,
            "is_quick_processing": True,
            "processing_order": 3,
        },
    ],
}

STUDIO_PROFILE = {
    "name": "Studio",
    "description": "Professional portrait-quality enhancements",
    "mode": "studio",
    "intensity_multiplier": 1.1,
    "target_audience": "professional",
    "average_processing_time": 4.0,
    "applicability_conditions": [
        {"factor": "face_quality", "threshold": 0.4, "condition": "gt"},
    ],
    "estimated_improvements": {
        "professional_quality": 0.35,
        "background_separation": 0.30,
        "skin_appearance": 0.22,
        "lighting": 0.20,
        "overall_composition": 0.18,
    },
    "enhancements": [
        {
            "type": "auto_enhance",
            "base_intensity": 0.5,
            "priority": 100,
            "is_quick_processing": True,
            "processing_order": 1,
        },
        {
            "type": "background_blur",
            "base_intensity": 0.6,
            "priority": 95,
            "prerequisites": ["auto_enhance"],
            "processing_order": 7,
        },
        {
            "type": "skin_smoothing",
            "base_intensity": 0.35,
            "priority": 90,
            "adaptive_adjustments": [
                {"factor": "age", "multiplier": 1.4, "threshold": 0.6, "condition": "gt"},
                {"factor": "face_quality", "multiplier": 1.2, "threshold": 0.7, "condition": "gt"},
            ],
            "processing_order": 3,
        },
        {
            "type": "eye_brightening",
            "base_intensity": 0.4,
            "priority": 85,
            "is_quick_processing": True,
            "processing_order": 4,
        },
        {
            "type": "teeth_whitening",
            "base_intensity": 0.25,
            "priority": 80,
            "processing_order": 5,
        },
        {
            "type": "brightness",
            "base_intensity": 0.2,
            "priority": 88,
            "adaptive_adjustments": [
                {"factor": "lighting_quality", "multiplier": 2.5, "threshold": 0.6, "condition": "lt"},
            ],
            "is_quick_processing": True,
            "processing_order": 2,
        },
        {
            "type": "contrast",
            "base_intensity": 0.15,
            "priority": 75,
            "is_quick_processing": True,
            "processing_order": 6,
        },
    ],
}

DEFAULT_PROFILES = [NATURAL_PROFILE, GLAM_PROFILE, HD_PROFILE, STUDIO_PROFILE]
