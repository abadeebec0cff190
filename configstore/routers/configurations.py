from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..deps import get_current_user, get_directory_store, get_root
from ..services.file_ops import DirectoryStore
from ..services.paths import Root

router = APIRouter(prefix='/api/configurations', tags=['configurations'])


@router.get('')
def list_configurations(
    store: DirectoryStore = Depends(get_directory_store),
    _=Depends(get_current_user),
) -> list[str]:
    return store.list_roots()


@router.get('/{name}')
def get_configuration_tree(
    path: Optional[str] = Query(default=None),
    root: Root = Depends(get_root),
    store: DirectoryStore = Depends(get_directory_store),
    _=Depends(get_current_user),
) -> dict:
    return store.list_tree(root, path).to_dict()
