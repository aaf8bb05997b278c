import base64
import hashlib
import logging
import random

import bcrypt

from errors import InvalidCredentials, UserExists, UserNotFound
from records import CollectionService, find_index, merge, uuid_id

logger = logging.getLogger(__name__)

HEX_DIGITS = "0123456789ABCDEF"
AVATAR_URL = "https://placehold.co/150x150/{color}/ffffff?text={initials}"


def _digest(password: str) -> bytes:
    # bcrypt only looks at 72 bytes; sha256 in base64 is 44
    return base64.b64encode(hashlib.sha256(password.encode('utf-8')).digest())


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_digest(password), bcrypt.gensalt()).decode('utf-8')


def check_password(password, stored) -> bool:
    if not isinstance(password, str) or not isinstance(stored, str):
        return password == stored
    if stored.startswith("$2"):
        try:
            return bcrypt.checkpw(_digest(password), stored.encode('utf-8'))
        except ValueError:
            pass
    # records written with hashing disabled
    return password == stored


def random_color() -> str:
    return "".join(random.choice(HEX_DIGITS) for _ in range(6))


def initials(name) -> str:
    if not name:
        return "??"
    parts = str(name).split(" ")
    result = ""
    if len(parts) > 0 and parts[0]:
        result += parts[0][0]
    if len(parts) > 1 and parts[1]:
        result += parts[1][0]
    return result.upper()


def avatar_url(color: str, user_initials: str) -> str:
    return AVATAR_URL.format(color=color, initials=user_initials)


def sanitize(user: dict) -> dict:
    return {k: v for k, v in user.items() if k != "password"}


class UserService(CollectionService):
    collection = "users"

    def __init__(self, store, new_id=uuid_id, strict=False, hash_passwords=True):
        super().__init__(store, new_id=new_id, strict=strict)
        self.hash_passwords = hash_passwords

    def _stored_password(self, password):
        if self.hash_passwords and isinstance(password, str):
            return hash_password(password)
        return password

    def login(self, email, password) -> dict:
        for u in self._load():
            if u.get("email") == email and check_password(password, u.get("password")):
                return u
        logger.info("Failed login for %s", email)
        raise InvalidCredentials()

    def register(self, name, email, password, role) -> dict:
        with self._lock():
            users = self._load()
            if any(u.get("email") == email for u in users):
                raise UserExists()

            color = random_color()
            user = {
                "id": self.new_id(),
                "name": name,
                "email": email,
                "password": self._stored_password(password),
                "role": role,
                "avatar": avatar_url(color, initials(name)),
                "color": f"#{color}",
            }
            users.append(user)
            self._save(users)
        logger.info("Registered user %s (%s)", user["id"], email)
        return user

    def update_profile(self, user_id, fields: dict) -> dict:
        with self._lock():
            users = self._load()
            idx = find_index(users, user_id)
            if idx == -1:
                raise UserNotFound()
            if "password" in fields:
                fields = {**fields, "password": self._stored_password(fields["password"])}
            users[idx] = merge(users[idx], fields)
            self._save(users)
            return users[idx]

    def list_sanitized(self) -> list:
        return [sanitize(u) for u in self._load()]
