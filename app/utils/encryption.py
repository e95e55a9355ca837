from typing import Protocol

from cryptography.fernet import Fernet

from app.config import settings
from app.utils import constants


class IEncryptionHelper(Protocol):
    def encrypt(self, plaintext: str) -> str: ...
    def decrypt(self, encrypted_text: str) -> str: ...


class FernetEncryptionHelper(IEncryptionHelper):
    """Symmetric encryption for platform tokens stored at rest."""

    def __init__(self, secret_key: str):
        self.secret_key = secret_key

    def _get_cipher(self) -> Fernet:
        if not self.secret_key:
            raise ValueError(constants.ENCRYPTION_KEY_NOT_FOUND)
        return Fernet(self.secret_key)

    def encrypt(self, plaintext: str) -> str:
        return self._get_cipher().encrypt(plaintext.encode()).decode()

    def decrypt(self, encrypted_text: str) -> str:
        return self._get_cipher().decrypt(encrypted_text.encode()).decode()


def get_encryption_helper() -> FernetEncryptionHelper:
    return FernetEncryptionHelper(secret_key=settings.SECRET_KEY)


def mask_token(token: str) -> str:
    """
    Masks a token string by revealing only the first and last four characters.

    If the token is 8 characters or fewer, the entire token is replaced with asterisks.
    Returns an empty string if the input is empty.
    """
    if not token or token.replace(" ", "") == "":
        return ""

    token_len = len(token)

    if token_len <= 8:
        return "*" * token_len

    return f"{token[:4]}{'*' * (token_len - 8)}{token[-4:]}"
