"""
Tests pour l'émission et la validation des jetons d'accès.

Vérifie la durée de validité d'une heure, le rejet uniforme des jetons expirés ou mal signés et
l'indistinction entre utilisateur inconnu et mauvais mot de passe.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from types import SimpleNamespace

import jwt
import pytest

from living_room.domain import credentials
from living_room.domain.auth import TokenAuthenticator, create_access_token, decode_token
from living_room.domain.errors import UnauthorizedError

SECRET = "unit-secret"
ALG = "HS256"


def _users(**rows):
    return lambda user_id: rows.get(user_id)


def _authenticator() -> TokenAuthenticator:
    admin = SimpleNamespace(id="admin-1234", password="V1ZkU2RHRlhOSGhOYWsw")
    return TokenAuthenticator(_users(**{"admin-1234": admin}), SECRET, ALG, 60)


def test_token_roundtrip_carries_subject() -> None:
    """Teste qu'un jeton fraîchement émis se décode avec son sujet."""
    token = create_access_token(SECRET, ALG, 60, {"sub": "user-00001"})
    data = decode_token(token, SECRET, ALG)
    assert data is not None
    assert data.sub == "user-00001"
    assert data.exp - data.iat == 3600


def test_token_valid_until_one_hour() -> None:
    """Teste qu'un jeton émis il y a 59 minutes est encore accepté."""
    issued = datetime.now(UTC) - timedelta(minutes=59)
    token = create_access_token(SECRET, ALG, 60, {"sub": "u"}, now=issued)
    assert decode_token(token, SECRET, ALG) is not None


def test_token_rejected_after_one_hour() -> None:
    """Teste qu'un jeton émis il y a plus d'une heure est refusé."""
    issued = datetime.now(UTC) - timedelta(minutes=61)
    token = create_access_token(SECRET, ALG, 60, {"sub": "u"}, now=issued)
    assert decode_token(token, SECRET, ALG) is None


def test_token_with_bad_signature_rejected() -> None:
    """Teste qu'un jeton signé avec une autre clé est refusé."""
    token = create_access_token("other-secret", ALG, 60, {"sub": "u"})
    assert decode_token(token, SECRET, ALG) is None
    assert decode_token("not-a-jwt", SECRET, ALG) is None


def test_token_without_expiry_rejected() -> None:
    """Teste qu'un jeton sans `exp` est refusé."""
    token = jwt.encode({"sub": "u"}, SECRET, algorithm=ALG)
    assert decode_token(token, SECRET, ALG) is None


def test_authenticate_issues_token_for_valid_credentials() -> None:
    """Teste l'émission d'un jeton pour l'utilisateur générique."""
    token = _authenticator().authenticate("admin-1234", "admin123")
    data = decode_token(token, SECRET, ALG)
    assert data is not None and data.sub == "admin-1234"


def test_authenticate_failures_are_indistinguishable() -> None:
    """Teste que mauvais mot de passe et utilisateur inconnu lèvent la même erreur."""
    auth = _authenticator()
    with pytest.raises(UnauthorizedError) as wrong_password:
        auth.authenticate("admin-1234", "admin124")
    with pytest.raises(UnauthorizedError) as unknown_user:
        auth.authenticate("nobody-000", "admin123")
    with pytest.raises(UnauthorizedError) as empty_password:
        auth.authenticate("admin-1234", "")
    outcomes = {
        (e.value.code, e.value.message, e.value.status_code)
        for e in (wrong_password, unknown_user, empty_password)
    }
    assert len(outcomes) == 1


def test_token_with_non_string_subject_rejected() -> None:
    """Teste qu'un jeton bien signé mais au sujet non textuel est refusé sans erreur serveur."""
    exp = datetime.now(UTC) + timedelta(minutes=5)
    token = jwt.encode({"sub": 1234, "exp": exp}, SECRET, algorithm=ALG)
    assert decode_token(token, SECRET, ALG) is None


def test_unknown_user_runs_pbkdf2_dummy_verification(monkeypatch) -> None:
    """Teste qu'un id inconnu coûte une vérification pbkdf2, comme un mauvais mot de passe."""
    calls = []
    monkeypatch.setattr(
        credentials.pwd_context, "dummy_verify", lambda *a, **k: calls.append(a) or False
    )
    auth = TokenAuthenticator(_users(), SECRET, ALG, 60, password_scheme="pbkdf2_sha256")
    with pytest.raises(UnauthorizedError):
        auth.authenticate("nobody-000", "admin123")
    assert len(calls) == 1


def test_unknown_user_runs_legacy_dummy_verification(monkeypatch) -> None:
    """Teste qu'un id inconnu compare aussi un encodage historique sous le schéma par défaut."""
    calls = []
    real_verify = credentials.verify_password

    def spy(secret, stored):
        calls.append(stored)
        return real_verify(secret, stored)

    monkeypatch.setattr(credentials, "verify_password", spy)
    with pytest.raises(UnauthorizedError):
        _authenticator().authenticate("nobody-000", "admin123")
    assert len(calls) == 1
    assert len(calls[0]) == credentials.LEGACY_LENGTH
