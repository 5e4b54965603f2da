# Patient Management Feature

from health_records.features.patients.models import Patient
from health_records.features.patients.router import router
from health_records.features.patients.service import PatientService

__all__ = ["Patient", "router", "PatientService"]
