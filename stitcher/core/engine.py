"""
Engine — Recursive $ref resolution

Walks a document depth-first and inlines every external $ref:

    {"$ref": "./pet.yaml#/Pet", "description": "d"}
        -> fetch ./pet.yaml (once per engine), resolve its own refs
           relative to pet.yaml, take /Pet, fill in missing siblings

Internal refs ("#/...") are left exactly as written for the consumer.

Walk rules:
- scalars come back unchanged
- sequences and plain mappings are rebuilt in order
- mappings with an internal $ref come back as-is, siblings included
- mappings with an external $ref are replaced by the resolved target
"""

import logging
from typing import TYPE_CHECKING, Dict, Optional

from ..errors import CircularReferenceError
from .cache import ResolutionState
from .document import DocumentValue, ValueKind, kind_of
from .location import Location
from .pointer import navigate
from .refs import REF_KEY, Ref, get_ref

if TYPE_CHECKING:
    from ..services.parser import DocumentParser
    from ..services.sources import ContentSource

logger = logging.getLogger(__name__)


class ResolutionEngine:
    """
    Inlines external references across a tree of documents.

    Fetching and parsing are delegated to the source and parser. Cache and
    cycle tracker live as long as the engine; reuse an engine to share
    fetched documents between stitch jobs, or use separate engines to keep
    them independent.
    """

    def __init__(
        self,
        source: 'ContentSource',
        parser: 'DocumentParser',
        state: Optional[ResolutionState] = None
    ):
        self.source = source
        self.parser = parser
        self.state = state or ResolutionState()

    @property
    def cache(self):
        return self.state.cache

    @property
    def resolving(self):
        return self.state.resolving

    # =========================================================================
    # Entry points
    # =========================================================================

    def resolve(self, text: str, base: Location) -> DocumentValue:
        """
        Parse ``text`` and inline every external reference in it.

        Args:
            text: Raw YAML or JSON
            base: Location of the document, anchor for relative refs

        Raises:
            StitchError: first failure encountered; nothing partial is returned
        """
        with self.state.lock:
            tree = self.parser.parse(text, location=base.canonical)
            return self.resolve_tree(tree, base)

    def resolve_location(self, location: Location) -> DocumentValue:
        """Fetch the document at ``location`` and resolve it."""
        with self.state.lock:
            logger.debug(f"Fetching root document {location}")
            text = self.source.fetch(location)
            return self.resolve(text, location)

    def resolve_tree(self, tree: DocumentValue, base: Location) -> DocumentValue:
        """Resolve an already parsed tree."""
        with self.state.lock:
            return self._walk(tree, base)

    def clear_cache(self) -> None:
        self.state.clear()

    # =========================================================================
    # Walk
    # =========================================================================

    def _walk(self, value: DocumentValue, base: Location) -> DocumentValue:
        kind = kind_of(value)

        if kind.is_scalar:
            return value

        if kind is ValueKind.SEQUENCE:
            return [self._walk(item, base) for item in value]

        # ValueKind.MAPPING
        ref = get_ref(value)
        if ref is None:
            return {key: self._walk(item, base) for key, item in value.items()}

        if Ref.parse(ref).is_internal:
            return value

        return self.resolve_external_ref(ref, base, value)

    def resolve_external_ref(
        self,
        ref: str,
        base: Location,
        siblings: Dict[str, DocumentValue]
    ) -> DocumentValue:
        """
        Resolve one external $ref found in the document at ``base``.

        Args:
            ref: The $ref string, e.g. "../core/errors.yaml#/ApiError"
            base: Location of the document containing the $ref
            siblings: The mapping holding the $ref (its other keys are merged)

        Raises:
            CircularReferenceError: target is still being resolved
            FetchError, EncodingError, ParseError: target could not be loaded
            ReferenceNotFoundError: pointer path absent from the target
        """
        token = Ref.parse(ref)
        target = base.resolve(token.target)
        key = target.canonical

        with self.state.lock:
            if key in self.resolving:
                logger.debug(f"Cycle detected: {ref} from {base}")
                raise CircularReferenceError(ref, location=key)

            if key in self.cache:
                logger.debug(f"Cache hit: {key}")
                document = self.cache.get(key)
            else:
                document = self._load(target, ref)

        if token.has_sub_pointer:
            candidate = navigate(document, token.pointer, location=key)
        else:
            candidate = document

        return self._merge_siblings(candidate, siblings, base)

    def _load(self, target: Location, ref: str) -> DocumentValue:
        """Fetch, parse and fully resolve one external document, then cache it."""
        key = target.canonical
        with self.resolving.track(key, ref):
            logger.debug(f"Fetching {key}")
            text = self.source.fetch(target)
            tree = self.parser.parse(text, location=key)
            resolved = self._walk(tree, target)
            self.cache.put(key, resolved)
        return resolved

    def _merge_siblings(
        self,
        candidate: DocumentValue,
        siblings: Dict[str, DocumentValue],
        base: Location
    ) -> DocumentValue:
        """
        Add sibling keys the resolved target does not define.

        The target always wins. Non-mapping targets drop the siblings. The
        candidate may be a cached document, so the merge builds a new mapping.

        Added sibling values are walked rather than copied verbatim: an
        external $ref inside a sibling is inlined too, and if it cannot be
        resolved the whole stitch fails like any other ref would.
        """
        if kind_of(candidate) is not ValueKind.MAPPING:
            return candidate

        extra = [key for key in siblings if key != REF_KEY and key not in candidate]
        if not extra:
            return candidate

        merged = dict(candidate)
        for key in extra:
            merged[key] = self._walk(siblings[key], base)
        return merged
