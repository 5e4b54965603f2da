# Patient Management Feature - Router

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from health_records.database import get_session
from health_records.features.patients.schemas import (
    CreatePatientRequest,
    UpdatePatientRequest,
    PatientResponse,
)
from health_records.features.patients.service import PatientService
from health_records.features.auth.dependencies import get_current_claims
from health_records.features.auth.schemas import TokenClaims


router = APIRouter(prefix="/patients", tags=["Patients"])


@router.get("/{patient_id}", response_model=PatientResponse)
async def get_patient(
    patient_id: str,
    claims: TokenClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_session),
):
    """Get a specific patient by id."""
    patient = await PatientService.get_patient_by_id(session, patient_id)
    return PatientService.patient_to_response(patient)


@router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
async def create_patient(
    request: CreatePatientRequest,
    claims: TokenClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_session),
):
    """
    Create a new patient.
    
    - **id**: Optional caller supplied id
    - **name**, **birthDate**, **gender**: Required
    - **email**, **phone**, **address**: Optional
    """
    patient = await PatientService.create_patient(session, request)
    return PatientService.patient_to_response(patient)


@router.put("/{patient_id}", response_model=PatientResponse)
async def update_patient(
    patient_id: str,
    request: UpdatePatientRequest,
    claims: TokenClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_session),
):
    """Update a patient's information. Omitted fields keep their value."""
    patient = await PatientService.update_patient(session, patient_id, request)
    return PatientService.patient_to_response(patient)
