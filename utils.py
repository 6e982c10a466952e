import os
import threading
import time
from urllib.parse import quote

from werkzeug.utils import secure_filename
from flask import url_for

ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}

# image references starting with this are files in UPLOAD_FOLDER, anything else is under static/
UPLOADS_PREFIX = 'uploads/'

_id_lock = threading.Lock()
_last_id = 0


def next_id():
    """Time-based id (epoch milliseconds), strictly increasing within the process."""
    global _last_id
    with _id_lock:
        candidate = int(time.time() * 1000)
        if candidate <= _last_id:
            candidate = _last_id + 1
        _last_id = candidate
        return str(candidate)


def allowed_file(filename):
    """Check if the file has an allowed extension."""
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def handle_file_upload(file, upload_folder, prefix=''):
    """Save an uploaded image into upload_folder and return its image reference, or None."""
    if file and allowed_file(file.filename):
        filename = secure_filename(f"{prefix}{file.filename}")
        os.makedirs(upload_folder, exist_ok=True)
        file.save(os.path.join(upload_folder, filename))
        return f"{UPLOADS_PREFIX}{filename}"
    return None


def image_url(reference):
    """URL for an image reference: uploaded files or bundled static images."""
    if reference.startswith(UPLOADS_PREFIX):
        return url_for('listings.uploaded_image', filename=reference[len(UPLOADS_PREFIX):])
    return url_for('static', filename=reference)


def mailto_link(email, subject):
    return f"mailto:{email}?subject={quote(subject)}"


def is_safe_redirect(target):
    """Only local absolute paths are accepted as post-login targets."""
    return bool(target) and target.startswith('/') and not target.startswith('//') and '\\' not in target
