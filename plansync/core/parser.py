from lxml import etree
from typing import Any, Dict, Union
import logging
from plansync.core.errors import ParseError
from plansync.core.parsing_schemas import RawFeed
from pydantic import ValidationError

logger = logging.getLogger(__name__)


def element_to_tree(element: etree._Element) -> Dict[str, Any]:
    """
    Converts an XML element into a generic dict tree.

    Attributes become string values; child elements are grouped by tag into
    lists, so repeated and single children look the same to consumers.
    """
    node: Dict[str, Any] = dict(element.attrib)
    for child in element:
        if not isinstance(child.tag, str):
            # Comments and processing instructions
            continue
        node.setdefault(etree.QName(child).localname, []).append(
            element_to_tree(child)
        )
    return node


def parse_feed_xml(xml_content: Union[str, bytes]) -> RawFeed:
    """
    Parses the provider XML document and validates the
    planList.output.base_plan path.

    Args:
        xml_content: The raw response body.

    Returns:
        The validated RawFeed. A document without base_plan entries yields
        an empty feed.

    Raises:
        ParseError: If the body is empty, is not well-formed XML, or lacks
            the planList/output structure.
    """
    if not xml_content:
        raise ParseError("Provider response body is empty")

    if isinstance(xml_content, str):
        xml_content = xml_content.encode("utf-8")

    try:
        root = etree.fromstring(xml_content)
    except etree.XMLSyntaxError as e:
        logger.error(f"XML Syntax Error: {e}")
        raise ParseError(f"Provider response is not well-formed XML: {e}") from e

    if etree.QName(root).localname != "planList":
        raise ParseError("Invalid provider response: missing required structure")

    tree = {"planList": element_to_tree(root)}
    outputs = tree["planList"].get("output")
    if not outputs:
        raise ParseError("Invalid provider response: missing required structure")

    base_plan_nodes = outputs[0].get("base_plan")
    if not base_plan_nodes:
        logger.warning("Provider response contains no plans")
        base_plan_nodes = []

    try:
        return RawFeed(base_plans=base_plan_nodes)
    except ValidationError as e:
        raise ParseError(f"Invalid provider response: {e}") from e
