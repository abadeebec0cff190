from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Form, Query, status
from fastapi.responses import PlainTextResponse

from ..deps import get_current_user, get_directory_store, get_root
from ..schemas import ApiResponse
from ..services.file_ops import DirectoryStore
from ..services.paths import Root

router = APIRouter(prefix='/api/configurations/{name}/directories', tags=['directories'])


@router.post('', status_code=status.HTTP_201_CREATED)
def create_directory(
    path: str = Query(...),
    root: Root = Depends(get_root),
    store: DirectoryStore = Depends(get_directory_store),
    _=Depends(get_current_user),
):
    store.create_directory(root, path)
    return ApiResponse(ok=True, message='Directory created', data={'path': path})


@router.patch('', response_class=PlainTextResponse)
def rename_directory(
    path: str = Query(...),
    new_name: Optional[str] = Form(default=None, alias='newName'),
    root: Root = Depends(get_root),
    store: DirectoryStore = Depends(get_directory_store),
    _=Depends(get_current_user),
):
    return PlainTextResponse(store.rename_directory(root, path, new_name))


@router.delete('')
def delete_directory(
    path: str = Query(...),
    root: Root = Depends(get_root),
    store: DirectoryStore = Depends(get_directory_store),
    _=Depends(get_current_user),
):
    store.delete_directory(root, path)
    return ApiResponse(ok=True, message='Directory deleted')
