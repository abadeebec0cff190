from __future__ import annotations

import os

import pytest

from configstore.services.errors import PathNotDirectoryError, UnreadableError
from configstore.services.tree import FILES_KEY, Tree, build_tree


def test_build_tree_nests_directories_and_lists_files(tmp_path):
    (tmp_path / 'sub').mkdir()
    (tmp_path / 'sub' / 'a.txt').write_text('a', encoding='utf-8')
    (tmp_path / 'b.txt').write_text('b', encoding='utf-8')

    tree = build_tree(tmp_path)

    assert tree.to_dict() == {'sub': {FILES_KEY: ['a.txt']}, FILES_KEY: ['b.txt']}
    assert FILES_KEY == '_files'


def test_build_tree_omits_files_key_for_empty_levels(tmp_path):
    (tmp_path / 'empty').mkdir()
    (tmp_path / 'outer' / 'inner').mkdir(parents=True)

    assert build_tree(tmp_path).to_dict() == {'empty': {}, 'outer': {'inner': {}}}


def test_build_tree_returns_immutable_value(tmp_path):
    (tmp_path / 'x.xml').write_text('<x/>', encoding='utf-8')

    tree = build_tree(tmp_path)

    assert tree == Tree(directories=(), files=('x.xml',))
    with pytest.raises(AttributeError):
        tree.files = ()


def test_build_tree_does_not_follow_symlinked_directories(tmp_path):
    (tmp_path / 'real').mkdir()
    os.symlink(tmp_path, tmp_path / 'real' / 'loop')

    assert build_tree(tmp_path).to_dict() == {'real': {FILES_KEY: ['loop']}}


def test_build_tree_rejects_files(tmp_path):
    target = tmp_path / 'file.txt'
    target.write_text('x', encoding='utf-8')

    with pytest.raises(PathNotDirectoryError):
        build_tree(target)


def test_build_tree_reports_unreadable_directories(monkeypatch, tmp_path):
    def _deny(_path):
        raise PermissionError('denied')

    monkeypatch.setattr('configstore.services.tree.os.scandir', _deny)

    with pytest.raises(UnreadableError):
        build_tree(tmp_path)
