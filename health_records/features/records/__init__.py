# Health Records Feature

from health_records.features.records.models import Attachment, HealthRecord

__all__ = ["Attachment", "HealthRecord"]
