import random
import string
import time
from datetime import datetime
from slugify import slugify as python_slugify


def generate_invoice_number(now: datetime = None) -> str:
    """INV-YYYYMMDD-<last six digits of the epoch milliseconds>"""
    now = now or datetime.now()
    timestamp = str(int(now.timestamp() * 1000))[-6:]
    return f"INV-{now.strftime('%Y%m%d')}-{timestamp}"


def format_order_code(order_id: int) -> str:
    """Customer facing order reference, e.g. TR00042"""
    return f"TR{order_id:05d}"


def slugify(text: str) -> str:
    """Generate URL-friendly slug"""
    return python_slugify(text)


def random_token(length: int = 6) -> str:
    return ''.join(random.choices(string.ascii_lowercase + string.digits, k=length))


def storage_key(filename: str) -> str:
    """Unique object key that keeps a readable stem and the extension"""
    stem, _, extension = filename.rpartition('.')
    if not stem:
        stem, extension = extension, ''
    key = f"{int(time.time() * 1000)}-{random_token()}-{slugify(stem) or 'file'}"
    return f"{key}.{extension.lower()}" if extension else key


def allowed_file(filename: str, allowed_extensions: set) -> bool:
    """Check if file extension is allowed"""
    return '.' in filename and \
           filename.rsplit('.', 1)[1].lower() in allowed_extensions
