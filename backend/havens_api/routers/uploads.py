"""
Image upload endpoint for menu item pictures.
"""

from fastapi import APIRouter, Depends, File, UploadFile

from havens_api.models import Staff
from havens_api.routers._common import require_permission
from havens_api.services.storage import ImageStorage, get_image_storage, store_image
from havens_shared.config.constants import Permissions
from havens_shared.config.settings import settings
from havens_shared.utils.schemas import UploadResponse


router = APIRouter(prefix="/api", tags=["uploads"])


@router.post("/upload", response_model=UploadResponse)
def upload_image(
    file: UploadFile = File(...),
    storage: ImageStorage = Depends(get_image_storage),
    _: Staff = Depends(require_permission(Permissions.MANAGE_MENU)),
) -> UploadResponse:
    """
    Store an image under a generated unique key and return its public URL.
    The URL is what the menu item form saves as image_url.
    """
    # One byte past the limit is enough for store_image to reject it
    data = file.file.read(settings.upload_max_bytes + 1)
    url = store_image(storage, data, file.filename, file.content_type)
    return UploadResponse(url=url)
