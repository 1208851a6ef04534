"""Media upload endpoint for the Echo Board API."""

from typing import Annotated

from fastapi import APIRouter, File, Request, UploadFile
from fastapi.concurrency import run_in_threadpool

from echo_board.api.v1.dependencies import ActiveIdentityDep, MediaStorageDep
from echo_board.schemas.post import UploadResult

router = APIRouter(tags=["uploads"])


@router.post("/upload", response_model=UploadResult)
async def upload_files(
    request: Request,
    _uploader: ActiveIdentityDep,
    media_storage: MediaStorageDep,
    files: Annotated[list[UploadFile] | None, File(description="Up to five files")] = None,
) -> UploadResult:
    """Store uploaded files and return descriptors to attach to a new post.

    Raises:
        InvalidArgumentError: If no files, too many files, an oversized file or
            a disallowed type is submitted.
    """
    files = files or []
    media_storage.check_batch(len(files))

    stored = []
    for upload in files:
        # Read one byte past the limit so oversized files are detected
        # without buffering them whole.
        data = await upload.read(media_storage.max_bytes + 1)
        media = await run_in_threadpool(
            media_storage.save,
            upload.filename or "upload",
            upload.content_type,
            data,
            base_url=str(request.base_url),
        )
        stored.append(media)
    return UploadResult(files=stored)
