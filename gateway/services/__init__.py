"""Gateway Services"""

from .orchestrator import OrchestrationService, SessionNotFound

__all__ = ["OrchestrationService", "SessionNotFound"]
