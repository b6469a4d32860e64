"""
Domain Exceptions

Failures raised inside the safety core. None of these are
allowed to reach the user: AnalysisFailure is caught at the
conversation flow boundary, ResourceCatalogError at catalog load.
"""


class HavenError(Exception):
    """Base exception for safety core errors."""


class AnalysisFailure(HavenError):
    """
    A signal extractor could not analyze its input.
    
    SAFETY_NOTE: Callers on the crisis path must fall back to
    keyword-only detection when this is raised.
    """
    
    def __init__(
        self,
        message: str,
        component: str,
    ) -> None:
        super().__init__(message)
        self.component = component


class ResourceCatalogError(HavenError):
    """A crisis resource catalog override could not be loaded."""
    
    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path
