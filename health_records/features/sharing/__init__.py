# Record Sharing Feature

from health_records.features.sharing.models import SharedAccess

__all__ = ["SharedAccess"]
