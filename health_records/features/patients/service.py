# Patient Management Feature - Service

from sqlalchemy.ext.asyncio import AsyncSession
from health_records.features.patients.models import Patient
from health_records.features.patients.schemas import (
    CreatePatientRequest,
    UpdatePatientRequest,
    PatientResponse,
)
from health_records.core.logging import get_logger
from health_records.shared.exceptions import NotFoundException
from health_records.shared.utils import normalize_email


logger = get_logger(__name__)


class PatientService:
    """Service class for patient management operations."""
    
    @staticmethod
    def patient_to_response(patient: Patient) -> PatientResponse:
        """Convert Patient row to response schema."""
        return PatientResponse(
            id=patient.id,
            name=patient.name,
            birth_date=patient.birth_date,
            gender=patient.gender,
            email=patient.email,
            phone=patient.phone,
            address=patient.address,
            created_at=patient.created_at,
            updated_at=patient.updated_at,
        )
    
    @staticmethod
    async def create_patient(session: AsyncSession, request: CreatePatientRequest) -> Patient:
        """Create a new patient."""
        data = request.model_dump(exclude_none=True)
        if "email" in data:
            data["email"] = normalize_email(data["email"])
        
        patient = Patient(**data)
        session.add(patient)
        await session.commit()
        
        logger.info(f"Created patient {patient.id}")
        return patient
    
    @staticmethod
    async def get_patient_by_id(session: AsyncSession, patient_id: str) -> Patient:
        """Get a patient by id."""
        patient = await session.get(Patient, patient_id)
        
        if not patient:
            raise NotFoundException("Patient not found")
        
        return patient
    
    @staticmethod
    async def update_patient(
        session: AsyncSession, patient_id: str, request: UpdatePatientRequest
    ) -> Patient:
        """Update a patient's information. Only supplied fields change."""
        patient = await PatientService.get_patient_by_id(session, patient_id)
        
        update_data = request.model_dump(exclude_unset=True)
        if update_data.get("email"):
            update_data["email"] = normalize_email(update_data["email"])
        
        for field, value in update_data.items():
            setattr(patient, field, value)
        
        patient.update_timestamp()
        await session.commit()
        
        logger.info(f"Updated patient {patient_id}: {list(update_data.keys())}")
        return patient
