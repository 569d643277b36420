"""Custom exception classes for Glow Engine"""


class EnhancementEngineException(Exception):
    """Base exception for the enhancement engine"""

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


# ========== Configuration Errors (load time) ==========

class ConfigurationException(EnhancementEngineException):
    """Raised when an enhancement profile is misconfigured"""

    def __init__(self, message: str = "Enhancement profile configuration is invalid"):
        super().__init__(message)


class UnknownEnhancementTypeException(ConfigurationException):
    """Raised when a profile references an enhancement type outside the vocabulary"""

    def __init__(self, value: str, message: str = None):
        if message is None:
            message = f"Unknown enhancement type: {value}"
        self.value = value
        super().__init__(message)


class UnknownFactorException(ConfigurationException):
    """Raised when a condition or adjustment references an unknown factor"""

    def __init__(self, value: str, message: str = None):
        if message is None:
            message = f"Unknown adaptive factor: {value}"
        self.value = value
        super().__init__(message)


class UnknownComparisonOperatorException(ConfigurationException):
    """Raised when a condition uses an unknown comparison operator"""

    def __init__(self, value: str, message: str = None):
        if message is None:
            message = f"Unknown comparison operator: {value}"
        self.value = value
        super().__init__(message)


class PrerequisiteCycleException(ConfigurationException):
    """Raised when enhancement prerequisites form a cycle"""

    def __init__(self, cycle: list, message: str = None):
        if message is None:
            path = " -> ".join(str(item) for item in cycle)
            message = f"Prerequisite cycle detected: {path}"
        self.cycle = cycle
        super().__init__(message)


class DuplicateProfileException(ConfigurationException):
    """Raised when a profile name is registered twice"""

    def __init__(self, name: str, message: str = None):
        if message is None:
            message = f"Enhancement profile already registered: {name}"
        self.name = name
        super().__init__(message)


# ========== Validation Errors (caller input) ==========

class ValidationException(EnhancementEngineException):
    """Raised when caller-supplied values are rejected"""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message)


class InvalidFeedbackException(ValidationException):
    """Raised when a feedback value is outside its allowed range"""

    def __init__(self, field: str, value, message: str = None):
        if message is None:
            message = f"Feedback field '{field}' must be within [0, 1], got {value}"
        self.field = field
        self.value = value
        super().__init__(message)


class InvalidAnalysisException(ValidationException):
    """Raised when an analysis snapshot score is outside [0, 1]"""

    def __init__(self, field: str, value, message: str = None):
        if message is None:
            message = f"Analysis score '{field}' must be within [0, 1], got {value}"
        self.field = field
        self.value = value
        super().__init__(message)


# ========== Lookup Errors ==========

class NotFoundException(EnhancementEngineException):
    """Raised when a requested record does not exist"""

    def __init__(self, message: str = "Requested resource was not found"):
        super().__init__(message)


class ProfileNotFoundException(NotFoundException):
    """Raised when an enhancement profile is not in the catalog"""

    def __init__(self, name: str, message: str = None):
        if message is None:
            message = f"Enhancement profile not found: {name}"
        self.name = name
        super().__init__(message)


class LearningProfileNotFoundException(NotFoundException):
    """Raised when a user has no learning profile yet"""

    def __init__(self, user_id: str, message: str = None):
        if message is None:
            message = f"No learning profile for user: {user_id}"
        self.user_id = user_id
        super().__init__(message)


class CustomProfileNotFoundException(NotFoundException):
    """Raised when a user has no custom enhancement profile yet"""

    def __init__(self, user_id: str, message: str = None):
        if message is None:
            message = f"No custom enhancement profile for user: {user_id}"
        self.user_id = user_id
        super().__init__(message)
