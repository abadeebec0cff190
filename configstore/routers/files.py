from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Header, Query, Response, UploadFile, status
from fastapi.responses import PlainTextResponse

from ..deps import get_current_user, get_file_store, get_root
from ..schemas import ApiResponse
from ..services.file_ops import FileStore
from ..services.paths import Root
from ..services.versioning import format_etag, parse_entity_tags

router = APIRouter(prefix='/api/configurations/{name}/files', tags=['files'])


@router.get('')
def get_file(
    path: str = Query(...),
    if_none_match: Optional[str] = Header(default=None),
    root: Root = Depends(get_root),
    store: FileStore = Depends(get_file_store),
    _=Depends(get_current_user),
):
    result = store.get_file(root, path, parse_entity_tags(if_none_match))
    headers = {'ETag': format_etag(result.version)}
    if result.unchanged:
        return Response(status_code=status.HTTP_304_NOT_MODIFIED, headers=headers)
    return Response(content=result.content, media_type=result.media_type, headers=headers)


@router.post('')
def create_file(
    response: Response,
    path: str = Query(...),
    file: UploadFile = File(...),
    root: Root = Depends(get_root),
    store: FileStore = Depends(get_file_store),
    _=Depends(get_current_user),
):
    version = store.create_file(root, path, file.file.read())
    response.headers['ETag'] = format_etag(version)
    return ApiResponse(ok=True, message='File created', data={'path': path, 'version': version})


@router.put('')
def replace_file(
    response: Response,
    path: str = Query(...),
    file: UploadFile = File(...),
    if_match: Optional[str] = Header(default=None),
    root: Root = Depends(get_root),
    store: FileStore = Depends(get_file_store),
    _=Depends(get_current_user),
):
    version = store.replace_file(root, path, file.file.read(), parse_entity_tags(if_match))
    response.headers['ETag'] = format_etag(version)
    return ApiResponse(ok=True, message='File saved', data={'path': path, 'version': version})


@router.patch('', response_class=PlainTextResponse)
def rename_file(
    path: str = Query(...),
    new_name: Optional[str] = Form(default=None, alias='newName'),
    root: Root = Depends(get_root),
    store: FileStore = Depends(get_file_store),
    _=Depends(get_current_user),
):
    return PlainTextResponse(store.rename_file(root, path, new_name))


@router.delete('')
def delete_file(
    path: str = Query(...),
    if_match: Optional[str] = Header(default=None),
    root: Root = Depends(get_root),
    store: FileStore = Depends(get_file_store),
    _=Depends(get_current_user),
):
    store.delete_file(root, path, parse_entity_tags(if_match))
    return ApiResponse(ok=True, message='File deleted')
