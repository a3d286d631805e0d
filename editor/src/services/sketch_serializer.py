"""
Eschersketch - Sketch Serializer

Converts the committed operation history to and from JSON text. A sketch is a
JSON array of operation records in commit order; see models/operations.py for
the record layout.

Decoding is all-or-nothing: the whole document is parsed before anything is
returned, so a failed load never leaves a partially replaced history.
"""

import json
import logging
from typing import Iterable, List

from constants import ALL_SYMMETRIES
from models.operations import DrawOperation

logger = logging.getLogger(__name__)


class CorruptSketchError(ValueError):
    """Sketch text is not valid JSON or contains an undecodable record."""
    pass


def serialize(ops: Iterable[DrawOperation], indent=None) -> str:
    """Encode operations as a JSON array of records."""
    return json.dumps([op.to_record() for op in ops], indent=indent)


def deserialize(text: str) -> List[DrawOperation]:
    """Decode a sketch document.

    Args:
        text: JSON text produced by serialize()

    Returns:
        List of DrawOperation in commit order

    Raises:
        CorruptSketchError: invalid JSON, unknown tool tag, unknown symmetry
            or missing/malformed fields
    """
    try:
        data = json.loads(text)
    except (TypeError, json.JSONDecodeError) as e:
        raise CorruptSketchError(f"Sketch is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise CorruptSketchError("Sketch must be a JSON array of operations")

    ops = []
    for index, record in enumerate(data):
        if not isinstance(record, dict):
            raise CorruptSketchError(f"Record {index} is not an object")
        try:
            op = DrawOperation.from_record(record)
        except (AttributeError, KeyError, OverflowError, TypeError, ValueError) as e:
            raise CorruptSketchError(f"Record {index} ({record.get('tool')!r}): {e}") from e

        if op.symmetry is not None and op.symmetry.sym not in ALL_SYMMETRIES:
            raise CorruptSketchError(
                f"Record {index} uses unknown symmetry '{op.symmetry.sym}'")
        ops.append(op)

    logger.debug("Decoded %d operations", len(ops))
    return ops
