import logging
from typing import Any, Iterable, List
import yaml
from .shapes import GeometryObject

logger = logging.getLogger(__name__)

FORMAT_NAME = "vectorgraph"
FORMAT_VERSION = 1
FILE_EXTENSION = ".graph"


class SceneFormatError(ValueError):
    """Raised when a scene document cannot be decoded."""

    pass


def serialize_scene(objects: Iterable[GeometryObject]) -> bytes:
    """
    Encodes an object list as a YAML document. Selection flags are not
    written.
    """
    document = {
        "format": FORMAT_NAME,
        "version": FORMAT_VERSION,
        "objects": [obj.to_dict() for obj in objects],
    }
    text = yaml.safe_dump(document, sort_keys=False)
    return text.encode("utf-8")


def deserialize_scene(data: bytes) -> List[GeometryObject]:
    """
    Decodes a document produced by serialize_scene(). All returned objects
    are unselected.

    Raises:
        SceneFormatError: If the data is not a valid scene document. No
            partial result is ever returned.
    """
    try:
        document: Any = yaml.safe_load(data)
    except yaml.YAMLError as e:
        raise SceneFormatError(f"Not a valid YAML document: {e}")

    if not isinstance(document, dict):
        raise SceneFormatError("Scene document must be a mapping.")
    if document.get("format") != FORMAT_NAME:
        raise SceneFormatError(
            f"Unexpected document format {document.get('format')!r}"
        )
    version = document.get("version")
    if version != FORMAT_VERSION:
        raise SceneFormatError(f"Unsupported scene version {version!r}")

    entries = document.get("objects") or []
    if not isinstance(entries, list):
        raise SceneFormatError("'objects' must be a list.")

    objects = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise SceneFormatError(f"Object #{i} is not a mapping.")
        try:
            objects.append(GeometryObject.from_dict(entry))
        except ValueError as e:
            raise SceneFormatError(f"Object #{i}: {e}")
    logger.debug(f"Decoded {len(objects)} objects")
    return objects
