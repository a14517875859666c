"""Media routes: authenticated upload/delete/presign plus the public video and audio catalogue."""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile
from sqlalchemy.orm import Session

from storyhub.database import get_db
from storyhub.middleware.auth_middleware import Identity, get_current_identity
from storyhub.models.media import Media
from storyhub.schemas.media import (
    AudioDetail,
    MediaDeleteOut,
    MediaUploadOut,
    MediaUrlOut,
    PublicAudioItem,
    PublicVideoItem,
    VideoDetail,
)
from storyhub.services.media_service import (
    MediaService,
    to_audio_detail,
    to_public_audio,
    to_public_video,
    to_video_detail,
)
from storyhub.utils.helpers import parse_int

router = APIRouter(prefix="/media", tags=["media"])
public_router = APIRouter(prefix="/public/media", tags=["public"])


def get_media_service(request: Request, db: Session = Depends(get_db)) -> MediaService:
    state = request.app.state
    return MediaService(db, state.blob_store, state.frame_extractor, state.settings)


def _upload_out(media: Media, message: str) -> MediaUploadOut:
    return MediaUploadOut(
        id=media.id,
        url=media.file_url,
        file_name=media.file_name,
        file_size=media.file_size,
        content_type=media.content_type,
        media_type=media.media_type,
        category=media.category or "",
        preview=media.preview,
        thumbnail=media.thumbnail,
        message=message,
    )


@router.post("/video", response_model=MediaUploadOut)
def upload_video(
    file: UploadFile = File(...),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    identity: Identity = Depends(get_current_identity),
    service: MediaService = Depends(get_media_service),
):
    media = service.upload_video(
        identity.subject, file.filename, file.file.read(), file.content_type,
        title=title, description=description, category=category,
    )
    return _upload_out(media, "Video uploaded successfully")


@router.post("/audio", response_model=MediaUploadOut)
def upload_audio(
    file: UploadFile = File(...),
    title: Optional[str] = Form(None),
    identity: Identity = Depends(get_current_identity),
    service: MediaService = Depends(get_media_service),
):
    media = service.upload_audio(identity.subject, file.filename, file.file.read(), file.content_type, title=title)
    return _upload_out(media, "Audio uploaded successfully")


@router.post("/image", response_model=MediaUploadOut)
def upload_image(
    file: UploadFile = File(...),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    identity: Identity = Depends(get_current_identity),
    service: MediaService = Depends(get_media_service),
):
    media = service.upload_image(
        identity.subject, file.filename, file.file.read(), file.content_type,
        title=title, description=description, category=category,
    )
    return _upload_out(media, "Image uploaded successfully")


@router.delete("/{media_id}", response_model=MediaDeleteOut)
def delete_media(
    media_id: str,
    identity: Identity = Depends(get_current_identity),
    service: MediaService = Depends(get_media_service),
):
    service.delete(media_id, identity.subject)
    return MediaDeleteOut(success=True, message="Media deleted successfully")


@router.get("/{media_id}/url", response_model=MediaUrlOut)
def get_media_url(
    media_id: str,
    identity: Identity = Depends(get_current_identity),
    service: MediaService = Depends(get_media_service),
):
    _ = identity  # authenticated callers only
    url = service.presigned_url(media_id)
    return MediaUrlOut(url=url, expires_in=service.settings.PRESIGN_TTL_SECONDS)


@public_router.get("/video", response_model=List[PublicVideoItem])
def list_videos(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    service: MediaService = Depends(get_media_service),
):
    return [to_public_video(m) for m in service.list_videos(parse_int(page), parse_int(limit))]


@public_router.get("/video/{media_id}", response_model=VideoDetail)
def get_video(media_id: str, service: MediaService = Depends(get_media_service)):
    return to_video_detail(service.get_video(media_id))


@public_router.get("/audio", response_model=List[PublicAudioItem])
def list_audios(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    service: MediaService = Depends(get_media_service),
):
    return [to_public_audio(m) for m in service.list_audios(parse_int(page), parse_int(limit))]


@public_router.get("/audio/{media_id}", response_model=AudioDetail)
def get_audio(media_id: str, service: MediaService = Depends(get_media_service)):
    return to_audio_detail(service.get_audio(media_id))
