"""HTTP client for the health records API."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import httpx

from health_records.client.session import AuthSession, SessionUser


class ApiError(Exception):
    """Non-2xx answer from the API."""
    
    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


def expiration_from_days(days: Optional[int], now: Optional[datetime] = None) -> Optional[datetime]:
    """Turn the "expires in N days" choice into the absolute instant the API expects."""
    if days is None:
        return None
    now = now or datetime.now(timezone.utc)
    return now + timedelta(days=days)


class HealthRecordsClient:
    """
    Thin wrapper over the REST API.
    
    Pass an existing ``httpx.Client`` (for example FastAPI's ``TestClient``)
    as ``http`` or let the client open its own against ``base_url``.
    """
    
    def __init__(
        self,
        base_url: str = "http://localhost:3001",
        session: Optional[AuthSession] = None,
        http: Optional[httpx.Client] = None,
        api_prefix: str = "/api",
    ):
        self.session = session or AuthSession()
        self.http = http or httpx.Client(base_url=base_url)
        self.api_prefix = api_prefix
    
    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        headers = {**self.session.authorization_header(), **kwargs.pop("headers", {})}
        response = self.http.request(method, f"{self.api_prefix}{path}", headers=headers, **kwargs)
        
        if response.is_error:
            try:
                message = response.json().get("detail", response.reason_phrase)
            except ValueError:
                message = response.reason_phrase
            raise ApiError(response.status_code, message)
        
        return response.json()
    
    # Auth
    
    def _start_session(self, data: Dict[str, Any]) -> Dict[str, Any]:
        user = SessionUser(id=data["id"], name=data["name"], email=data["email"])
        self.session.sign_in(data["token"], user)
        return data
    
    def signup(self, name: str, email: str, password: str) -> Dict[str, Any]:
        data = self._request("POST", "/auth/signup", json={"name": name, "email": email, "password": password})
        return self._start_session(data)
    
    def signin(self, email: str, password: str) -> Dict[str, Any]:
        data = self._request("POST", "/auth/signin", json={"email": email, "password": password})
        return self._start_session(data)
    
    def signout(self) -> None:
        # Tokens are stateless; signing out only forgets them
        self.session.sign_out()
    
    def me(self) -> Dict[str, Any]:
        return self._request("GET", "/auth/me")
    
    # Records
    
    def list_records(self, patient_id: str) -> List[Dict[str, Any]]:
        return self._request("GET", "/records", params={"patientId": patient_id})
    
    def get_record(self, record_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/records/{record_id}")
    
    def create_record(self, **fields: Any) -> Dict[str, Any]:
        return self._request("POST", "/records", json=fields)
    
    def update_record(self, record_id: str, **fields: Any) -> Dict[str, Any]:
        return self._request("PUT", f"/records/{record_id}", json=fields)
    
    def delete_record(self, record_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/records/{record_id}")
    
    # Sharing
    
    def share_record(
        self,
        record_id: str,
        email: str,
        view: Optional[bool] = None,
        download: Optional[bool] = None,
        reshare: Optional[bool] = None,
        expires_in_days: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Share a record. Permissions left as None are not sent and take the
        server defaults.
        """
        body: Dict[str, Any] = {"email": email}
        for key, value in (
            ("viewPermission", view),
            ("downloadPermission", download),
            ("resharePermission", reshare),
        ):
            if value is not None:
                body[key] = value
        
        expiration = expiration_from_days(expires_in_days)
        if expiration is not None:
            body["expiration"] = expiration.isoformat()
        
        return self._request("POST", f"/records/{record_id}/share", json=body)
    
    def shared_with(self, email: str) -> List[Dict[str, Any]]:
        return self._request("GET", "/records/shared", params={"email": email})
    
    def revoke_share(self, grant_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/records/share/{grant_id}")
    
    # Patients
    
    def get_patient(self, patient_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/patients/{patient_id}")
    
    def create_patient(self, **fields: Any) -> Dict[str, Any]:
        return self._request("POST", "/patients", json=fields)
    
    def update_patient(self, patient_id: str, **fields: Any) -> Dict[str, Any]:
        return self._request("PUT", f"/patients/{patient_id}", json=fields)
    
    # Profile
    
    def get_profile(self) -> Dict[str, Any]:
        return self._request("GET", "/profile")
    
    def update_profile(self, name: Optional[str] = None, email: Optional[str] = None) -> Dict[str, Any]:
        body = {key: value for key, value in (("name", name), ("email", email)) if value}
        return self._request("PUT", "/profile", json=body)
    
    def change_password(self, current_password: str, new_password: str) -> Dict[str, Any]:
        return self._request(
            "POST",
            "/profile/change-password",
            json={"currentPassword": current_password, "newPassword": new_password},
        )
    
    def delete_account(self) -> Dict[str, Any]:
        data = self._request("DELETE", "/profile")
        self.session.sign_out()
        return data
