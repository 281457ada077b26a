from __future__ import annotations

import json
import uuid
from pathlib import Path

from simas_app.app_logger import get_logger
from simas_app.models import GUEST_PROFILE, UserProfile

logger = get_logger("services.identity")

SESSION_FILENAME = "current_user.json"
_PROFILE_NAMESPACE = uuid.UUID("6f1c3c5e-2b7d-4c55-9a53-0d3f7b2a9e41")


class InvalidProfileError(ValueError):
    pass


def profile_id_for(email: str) -> str:
    return str(uuid.uuid5(_PROFILE_NAMESPACE, email.strip().lower()))


class IdentityService:
    """Remembers which profile is signed in on this machine."""

    def __init__(self, directory: Path) -> None:
        self._directory = Path(directory)
        self._directory.mkdir(parents=True, exist_ok=True)
        self._session_file = self._directory / SESSION_FILENAME

    @property
    def directory(self) -> Path:
        return self._directory

    def relocate(self, directory: Path) -> None:
        """Move the remembered session into ``directory``."""
        target = Path(directory)
        if target == self._directory:
            return
        profile = self.current()
        previous_file = self._session_file

        target.mkdir(parents=True, exist_ok=True)
        self._directory = target
        self._session_file = target / SESSION_FILENAME
        if profile is not None:
            self._persist(profile)
            previous_file.unlink(missing_ok=True)
        logger.info("Session directory moved to %s", target)

    def current(self) -> UserProfile | None:
        if not self._session_file.exists():
            return None
        try:
            with self._session_file.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
            return UserProfile(
                id=str(payload["id"]),
                name=str(payload.get("name", "")),
                email=str(payload.get("email", "")),
            )
        except (OSError, ValueError, KeyError, TypeError):
            logger.warning("Ignoring unreadable session file %s", self._session_file)
            return None

    def sign_in(self, name: str, email: str) -> UserProfile:
        cleaned_name = name.strip()
        cleaned_email = email.strip()
        if not cleaned_name:
            raise InvalidProfileError("Name is required.")
        if "@" not in cleaned_email:
            raise InvalidProfileError("A valid email address is required.")

        profile = UserProfile(id=profile_id_for(cleaned_email), name=cleaned_name, email=cleaned_email)
        self._persist(profile)
        logger.info("Signed in as %s", profile.email)
        return profile

    def sign_in_as_guest(self) -> UserProfile:
        self._persist(GUEST_PROFILE)
        logger.info("Signed in as guest")
        return GUEST_PROFILE

    def sign_out(self) -> None:
        self._session_file.unlink(missing_ok=True)
        logger.info("Signed out")

    def _persist(self, profile: UserProfile) -> None:
        with self._session_file.open("w", encoding="utf-8") as handle:
            json.dump({"id": profile.id, "name": profile.name, "email": profile.email}, handle, indent=2)
