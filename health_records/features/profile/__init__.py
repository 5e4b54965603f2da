# Profile Feature

from health_records.features.profile.router import router

__all__ = ["router"]
