"""
HashSet Document Codec

Converts between hash field/value maps and the HashSet XML document:

    <HashSet>
        <Item><ID>field</ID><Value>value</Value></Item>
        ...
    </HashSet>

Text is escaped by ElementTree in both directions.
"""

import re
import xml.etree.ElementTree as ET

from redis_connector.core.config.constants import MESSAGE_ID_REQUIRED
from redis_connector.core.exceptions import BadInputError

ROOT_TAG = "HashSet"
ITEM_TAG = "Item"
ID_TAG = "ID"
VALUE_TAG = "Value"

# Characters outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile("[^\u0009\u000A\u000D\u0020-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


def serialize_hash(values: dict[str, str]) -> bytes:
    """
    Render a field/value map as a HashSet document (UTF-8, no declaration).

    Raises:
        BadInputError: If a field or value holds a character XML 1.0 cannot represent
    """
    root = ET.Element(ROOT_TAG)
    for field, value in values.items():
        for text in (field, value):
            if _INVALID_XML_CHARS.search(text):
                raise BadInputError(
                    f"Field {field!r} of the hash holds characters not allowed in XML",
                    details={"field": field},
                )
        item = ET.SubElement(root, ITEM_TAG)
        ET.SubElement(item, ID_TAG).text = field
        ET.SubElement(item, VALUE_TAG).text = value
    return ET.tostring(root, encoding="utf-8", xml_declaration=False)


def parse_hash(document: bytes | str) -> dict[str, str]:
    """
    Parse every Item of a HashSet document into a field/value map.

    Items are matched at any depth. A later Item with the same ID wins.

    Raises:
        BadInputError: On malformed XML, an Item without ID, or no Items at all
    """
    try:
        root = ET.fromstring(document)
    except ET.ParseError as e:
        raise BadInputError.from_exception(e, message=f"Malformed HashSet document: {e}")

    values: dict[str, str] = {}
    for item in root.iter(ITEM_TAG):
        field = item.findtext(ID_TAG)
        if not field:
            raise BadInputError(MESSAGE_ID_REQUIRED)
        values[field] = item.findtext(VALUE_TAG) or ""

    if not values:
        raise BadInputError("HashSet document contains no Item entries")
    return values
