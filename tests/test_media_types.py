from __future__ import annotations

from configstore.services.media_types import DEFAULT_MEDIA_TYPE, extension_of, media_type_for


def test_media_type_for_known_extensions():
    assert media_type_for('Configuration.xml') == 'application/xml'
    assert media_type_for('schema.XSD') == 'application/xml'
    assert media_type_for('deploy.properties') == 'text/plain'


def test_media_type_ignores_query_parameters():
    assert extension_of('flow.json?v=2') == 'json'
    assert media_type_for('flow.json?v=2') == 'application/json'


def test_media_type_falls_back_to_binary():
    assert media_type_for('README') == DEFAULT_MEDIA_TYPE
    assert media_type_for('blob.unknownext') == DEFAULT_MEDIA_TYPE
