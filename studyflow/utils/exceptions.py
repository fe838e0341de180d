"""Exception classes for StudyFlow."""


class StudyFlowError(Exception):
    pass


class ValidationError(StudyFlowError):
    pass


class StorageError(StudyFlowError):
    pass


class ConfigurationError(StudyFlowError):
    pass
