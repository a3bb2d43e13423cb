import uuid

from werkzeug.security import check_password_hash, generate_password_hash


def generate_receipt_id():
    return uuid.uuid4().hex[:12].upper()


def hash_password(password):
    return generate_password_hash(password, method="pbkdf2:sha256")


def verify_password(password_hash, password):
    if not password_hash or not password:
        return False
    return check_password_hash(password_hash, password)
