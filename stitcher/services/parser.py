"""
Parser — Raw YAML/JSON text to document values

JSON text goes through the json module first, rejecting duplicate keys;
anything it cannot read (YAML flow style, comments) falls back to YAML.
YAML is loaded with a SafeLoader subclass tuned for API descriptions:

- timestamps stay strings ("2024-01-01" is a date in YAML 1.1)
- scalar mapping keys keep their source text (200: -> "200")
- duplicate keys, non-scalar keys and non-document types are errors
"""

import json
from typing import Any, List, Optional, Tuple

import yaml

from ..core.document import DocumentValue, validate
from ..errors import ParseError


TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"
MERGE_TAG = "tag:yaml.org,2002:merge"
MAP_TAG = "tag:yaml.org,2002:map"


class DocumentLoader(yaml.SafeLoader):
    """SafeLoader producing only document values."""


DocumentLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _construct_mapping(loader: DocumentLoader, node: yaml.MappingNode) -> dict:
    explicit = set()
    for key_node, _ in node.value:
        if key_node.tag == MERGE_TAG:
            continue
        if not isinstance(key_node, yaml.ScalarNode):
            raise ParseError(f"Mapping key must be a scalar {key_node.start_mark}")
        if key_node.value in explicit:
            raise ParseError(f"Duplicate key '{key_node.value}' {key_node.start_mark}")
        explicit.add(key_node.value)

    # Merged (<<) pairs come first, so explicit keys override them
    loader.flatten_mapping(node)
    mapping = {}
    for key_node, value_node in node.value:
        if not isinstance(key_node, yaml.ScalarNode):
            raise ParseError(f"Mapping key must be a scalar {key_node.start_mark}")
        mapping[key_node.value] = loader.construct_object(value_node, deep=True)
    return mapping


DocumentLoader.add_constructor(MAP_TAG, _construct_mapping)


def _unique_object(pairs: List[Tuple[str, Any]]) -> dict:
    mapping = {}
    for key, value in pairs:
        if key in mapping:
            raise ParseError(f"Duplicate key '{key}'")
        mapping[key] = value
    return mapping


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Not a JSON number: {name}")


class DocumentParser:
    """Parses YAML or JSON text into a validated document value."""

    def parse(self, text: str, location: Optional[str] = None) -> DocumentValue:
        """
        Parse ``text``.

        A document consisting of ``null`` is a valid null value; text with
        no document at all (blank or only comments) is not.

        Args:
            text: Raw document text
            location: Where the text came from (for error messages)

        Raises:
            ParseError: malformed syntax, empty document, duplicate keys, or
                a value that is not a document value
        """
        loaded = self._load(text, location)

        try:
            return validate(loaded)
        except ParseError as e:
            raise ParseError(e.message, location=location) from e

    def _load(self, text: str, location: Optional[str]) -> Any:
        try:
            if text.lstrip()[:1] in ("{", "["):
                try:
                    return json.loads(
                        text,
                        object_pairs_hook=_unique_object,
                        parse_constant=_reject_constant,
                    )
                except ValueError:
                    pass  # Not strict JSON, try YAML
            return self._load_yaml(text)
        except yaml.YAMLError as e:
            raise ParseError(str(e), location=location) from e
        except ParseError as e:
            raise ParseError(e.message, location=location) from e

    def _load_yaml(self, text: str) -> Any:
        loader = DocumentLoader(text)
        try:
            node = loader.get_single_node()
            if node is None:
                raise ParseError("Document is empty")
            return loader.construct_document(node)
        finally:
            loader.dispose()
