from __future__ import annotations

import logging
import mimetypes

logger = logging.getLogger(__name__)

DEFAULT_MEDIA_TYPE = 'application/octet-stream'

_MEDIA_TYPES: dict[str, str] = {
    'xml': 'application/xml',
    'xsd': 'application/xml',
    'xsl': 'application/xml',
    'xslt': 'application/xml',
    'wsdl': 'application/xml',
    'json': 'application/json',
    'properties': 'text/plain',
    'txt': 'text/plain',
    'log': 'text/plain',
    'csv': 'text/csv',
    'yaml': 'application/yaml',
    'yml': 'application/yaml',
    'md': 'text/markdown',
    'html': 'text/html',
    'htm': 'text/html',
    'css': 'text/css',
    'js': 'text/javascript',
    'svg': 'image/svg+xml',
    'png': 'image/png',
    'jpg': 'image/jpeg',
    'jpeg': 'image/jpeg',
    'gif': 'image/gif',
    'zip': 'application/zip',
    'jar': 'application/java-archive',
}


def extension_of(file_name: str) -> str:
    name = file_name.split('?', 1)[0]
    if '.' not in name:
        return ''
    return name.rsplit('.', 1)[1].lower()


def media_type_for(file_name: str) -> str:
    extension = extension_of(file_name)
    media_type = _MEDIA_TYPES.get(extension)
    if media_type is None and extension:
        media_type = mimetypes.types_map.get(f'.{extension}')
    if media_type is None:
        logger.debug('no media type for extension [%s], using [%s]', extension, DEFAULT_MEDIA_TYPE)
        return DEFAULT_MEDIA_TYPE
    return media_type
