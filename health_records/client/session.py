"""Client-side authentication state."""

from typing import Callable, Dict, List, Optional

from pydantic import BaseModel


class SessionUser(BaseModel):
    """Identity kept next to the token after sign-in."""
    
    id: str
    name: str
    email: str


SessionListener = Callable[["AuthSession"], None]


class AuthSession:
    """
    Bearer token and signed-in user, passed explicitly to the API client.
    
    Listeners registered with ``subscribe`` are called after every sign-in and
    sign-out so other views holding the same session can refresh.
    """
    
    def __init__(self, token: Optional[str] = None, user: Optional[SessionUser] = None):
        self.token = token
        self.user = user
        self._listeners: List[SessionListener] = []
    
    @property
    def is_authenticated(self) -> bool:
        return self.token is not None
    
    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener; returns a function that removes it again."""
        self._listeners.append(listener)
        
        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        
        return unsubscribe
    
    def sign_in(self, token: str, user: SessionUser) -> None:
        self.token = token
        self.user = user
        self._notify()
    
    def sign_out(self) -> None:
        self.token = None
        self.user = None
        self._notify()
    
    def authorization_header(self) -> Dict[str, str]:
        """``Authorization: Bearer <token>`` when signed in, else nothing."""
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}
    
    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
