"""
Encoding normalization cascade.

Turns an upload of unknown encoding into UTF-8 text:

1. UTF-16/UTF-32 (by BOM or null-byte sniffing) is decoded straight away.
2. BOM-free content that already is clean UTF-8 is returned unchanged.
3. Otherwise an ordered list of strategies is tried; the first one whose
   output passes ``is_valid_conversion`` wins.
4. If none does, the content is decoded as UTF-8 with replacement.

Bad input never raises. Unreadable files give empty text; undecidable
encodings give best-effort text. Both are recorded as ImportIssues.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ninja_import.core.log import get_logger

from .bom import detect_wide_encoding, strip_bom
from .encoding import (
    REPLACEMENT_BYTES,
    TranscodeError,
    Transcoder,
    contains_windows1252_bytes,
    decode_with_fallback,
    fix_corrupted_windows1252,
    is_valid_conversion,
)
from .errors import ImportIssue, Location
from .models import EncodingCandidate, NormalizeResult, Strategy
from .sources import ByteSource, SourceError, SourceTooLarge

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = get_logger(__name__)

# Legacy single-byte encodings tried last, in this order
FALLBACK_ENCODINGS: tuple[EncodingCandidate, ...] = (
    EncodingCandidate.WINDOWS_1252,
    EncodingCandidate.ISO_8859_1,
    EncodingCandidate.ISO_8859_15,
    EncodingCandidate.CP1252,
)

Outcome = tuple[str, EncodingCandidate]


@dataclass
class _Attempt:
    """State shared by the strategies of one normalize() call."""

    source: ByteSource
    contents: bytes  # original bytes, BOM removed

    def reread(self) -> bytes | None:
        """Read the source again; None if it vanished in the meantime."""
        try:
            return self.source.read()
        except SourceError as e:
            logger.debug("Re-reading %s failed: %s", self.source.name, e.reason)
            return None


StrategyFn = Callable[[_Attempt], "Outcome | None"]


class EncodingNormalizer:
    """
    Normalizes uploads to UTF-8.

    Stateless apart from its configuration; one instance can serve
    concurrent calls as long as each call gets its own source.
    """

    def __init__(
        self,
        transcoder: Transcoder | None = None,
        *,
        fallback_encodings: Sequence[EncodingCandidate] = FALLBACK_ENCODINGS,
    ) -> None:
        self.transcoder = transcoder or Transcoder()
        self.fallback_encodings = tuple(fallback_encodings)

    @property
    def strategies(self) -> list[tuple[Strategy, StrategyFn]]:
        """Strategies in the order they are tried."""
        return [
            (Strategy.CLEAN_UTF8, self._clean_utf8),
            (Strategy.WINDOWS1252_CONTEXT, self._windows1252_context),
            (Strategy.WINDOWS1252_BINARY, self._windows1252_binary),
            (Strategy.CORRUPTION_REPAIR, self._corruption_repair),
            (Strategy.ENUMERATION, self._enumerate_encodings),
        ]

    def normalize(self, source: ByteSource) -> NormalizeResult:
        """
        Read source and return its content as UTF-8 text.

        Args:
            source: Where to read the upload from

        Returns:
            NormalizeResult; ``valid`` tells whether the text passed the
            validity check
        """
        location = Location(file=source.name)

        try:
            raw = source.read()
        except SourceTooLarge as e:
            logger.warning("Refusing %s: %s", source.name, e.reason)
            return self._unreadable(
                source,
                ImportIssue.fatal(
                    e.code,
                    f"Input {e.reason}",
                    location=location,
                    context={"max_bytes": e.max_bytes, "file_size": e.size},
                ),
            )
        except SourceError as e:
            logger.warning("Cannot read %s: %s", source.name, e.reason)
            return self._unreadable(
                source,
                ImportIssue.fatal(e.code, f"Cannot read file: {e.reason}", location=location),
            )

        wide = detect_wide_encoding(raw)
        if wide is not None:
            text, encoding = wide
            logger.debug("%s: decoded as %s", source.name, encoding.value)
            return self._result(source, raw, text, Strategy.WIDE_ENCODING, encoding)

        attempt = _Attempt(
            source=source,
            contents=strip_bom(raw),
        )

        for strategy, run in self.strategies:
            outcome = run(attempt)
            if outcome is None:
                logger.debug("%s: %s not applicable", source.name, strategy.value)
                continue

            text, encoding = outcome
            if is_valid_conversion(text):
                logger.debug("%s: accepted %s (%s)", source.name, strategy.value, encoding.value)
                return self._result(source, raw, text, strategy, encoding)

            logger.debug("%s: %s produced invalid text", source.name, strategy.value)

        logger.warning("%s: no encoding produced clean UTF-8, using lossy UTF-8", source.name)
        text = decode_with_fallback(attempt.contents, "utf-8")
        return self._result(
            source,
            raw,
            text,
            Strategy.FALLBACK,
            None,
            extra=[
                ImportIssue.warn(
                    "IMP-ENC-002",
                    "Could not determine the file encoding; some characters may be garbled",
                    location=location,
                    context={"tried": [e.value for e in self.fallback_encodings]},
                )
            ],
        )

    # -------------------------------------------------------------------------
    # Strategies
    # -------------------------------------------------------------------------

    def _decode(self, data: bytes, encoding: EncodingCandidate) -> Outcome | None:
        try:
            return self.transcoder.decode(data, encoding), encoding
        except TranscodeError as e:
            logger.debug("%s", e)
            return None

    def _clean_utf8(self, attempt: _Attempt) -> Outcome | None:
        return self._decode(attempt.contents, EncodingCandidate.UTF_8)

    def _windows1252_context(self, attempt: _Attempt) -> Outcome | None:
        data = attempt.reread()
        if data is None:
            return None
        return self._decode(strip_bom(data), EncodingCandidate.WINDOWS_1252)

    def _windows1252_binary(self, attempt: _Attempt) -> Outcome | None:
        data = attempt.reread()
        if data is None:
            return None
        data = strip_bom(data)
        if not contains_windows1252_bytes(data):
            return None
        return self._decode(data, EncodingCandidate.WINDOWS_1252)

    def _corruption_repair(self, attempt: _Attempt) -> Outcome | None:
        if REPLACEMENT_BYTES not in attempt.contents:
            return None
        return self._decode(fix_corrupted_windows1252(attempt.contents), EncodingCandidate.UTF_8)

    def _enumerate_encodings(self, attempt: _Attempt) -> Outcome | None:
        for encoding in self.fallback_encodings:
            outcome = self._decode(attempt.contents, encoding)
            if outcome is not None and is_valid_conversion(outcome[0]):
                return outcome
        return None

    # -------------------------------------------------------------------------
    # Results
    # -------------------------------------------------------------------------

    def _result(
        self,
        source: ByteSource,
        raw: bytes,
        text: str,
        strategy: Strategy,
        encoding: EncodingCandidate | None,
        *,
        extra: list[ImportIssue] | None = None,
    ) -> NormalizeResult:
        location = Location(file=source.name)
        issues: list[ImportIssue] = []

        if strategy.converted and encoding is not None:
            issues.append(
                ImportIssue.info(
                    "IMP-ENC-001",
                    f"Read as {encoding.value} and converted to UTF-8",
                    location=location,
                    context={"encoding": encoding.value, "strategy": strategy.value},
                )
            )

        if strategy == Strategy.CORRUPTION_REPAIR:
            issues.append(
                ImportIssue.warn(
                    "IMP-ENC-003",
                    "Replacement characters were assumed to be apostrophes",
                    location=location,
                    context={"replaced": raw.count(REPLACEMENT_BYTES)},
                )
            )

        issues.extend(extra or [])

        return NormalizeResult(
            text=text,
            strategy=strategy,
            encoding=encoding,
            source=source.name,
            byte_size=len(raw),
            valid=is_valid_conversion(text),
            issues=issues,
        )

    def _unreadable(self, source: ByteSource, issue: ImportIssue) -> NormalizeResult:
        return NormalizeResult(
            text="",
            strategy=Strategy.UNREADABLE,
            encoding=None,
            source=source.name,
            byte_size=0,
            valid=False,
            issues=[issue],
        )


def normalize(source: ByteSource, transcoder: Transcoder | None = None) -> NormalizeResult:
    """Normalize source with a default-configured EncodingNormalizer."""
    return EncodingNormalizer(transcoder).normalize(source)
