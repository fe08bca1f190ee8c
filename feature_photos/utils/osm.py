"""OpenStreetMap identity helpers."""

OSM_TYPES = ("node", "way", "relation")


def get_short_id(osm_meta) -> str:
    """
    Derive the short identifier of an OSM element.

    The short id is the first letter of the element type followed by its
    numeric id, e.g. ``node 123`` -> ``n123``, ``relation 7`` -> ``r7``.

    Args:
        osm_meta: Object with ``type`` and ``id`` attributes

    Raises:
        ValueError: For element types other than node/way/relation
    """
    if osm_meta.type not in OSM_TYPES:
        raise ValueError(f"Unknown OSM element type: {osm_meta.type!r}")
    return f"{osm_meta.type[0]}{osm_meta.id}"
