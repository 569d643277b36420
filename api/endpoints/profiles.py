"""Enhancement profile catalog endpoints"""

from typing import Any, Dict, List
from fastapi import APIRouter, Depends

from core.dependencies import get_profile_catalog
from services.profile_catalog import ProfileCatalog


router = APIRouter()


@router.get("/profiles")
async def list_profiles(catalog: ProfileCatalog = Depends(get_profile_catalog)) -> List[Dict[str, Any]]:
    """All catalog profiles with their operation tables"""
    return [profile.to_dict() for profile in catalog]


@router.get("/profiles/{name}")
async def get_profile(name: str, catalog: ProfileCatalog = Depends(get_profile_catalog)) -> Dict[str, Any]:
    """
    One catalog profile

    Raises:
        ProfileNotFoundException: 404 if the name is not registered
    """
    profile = catalog.get(name)
    data = profile.to_dict()
    data["quick_enhancements"] = [config.type.value for config in profile.quick_enhancements()]
    return data
