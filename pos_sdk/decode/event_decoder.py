# pos_sdk/decode/event_decoder.py

from typing import Any, Dict, List

from ..core.errors import EventDecodeError
from ..core.logging import LoggingMixin
from ..types import DecodedEvent, EventSchema, Felt, RawEvent, SemanticType
from ..utils.felts import parse_word
from ..utils.uint256 import from_uint256


class WordStream:
    """Consumes the words of one event section (keys or data) in order"""

    def __init__(self, words: List[Felt]):
        self.words = words
        self.position = 0

    @property
    def exhausted(self) -> bool:
        return self.position >= len(self.words)

    def take(self) -> Felt:
        word = self.words[self.position]
        self.position += 1
        return word


class EventDecoder(LoggingMixin):
    """
    Turns a raw event record into named fields using its schema.

    Fields marked as keys (Cairo `#[key]` members) are read from the event
    keys after the selector, every other field from the data words, each in
    schema order. A field with no word left in its section is skipped. A
    wide integer (u256) takes two words, low then high; a missing high word
    counts as zero.

    legacy_wide_integer reproduces the historical decoder, which read a
    single word per u256 and always used zero for the high limb. Values that
    need the high limb decode wrong in that mode, and every later field is
    shifted by one word.
    """

    def __init__(self, legacy_wide_integer: bool = False):
        self.legacy_wide_integer = legacy_wide_integer
        if legacy_wide_integer:
            self.log_warning("Legacy single-word u256 decoding enabled; high limbs are ignored")

    def decode(self, raw: RawEvent, schema: EventSchema) -> DecodedEvent:
        return DecodedEvent(type=schema.name, data=self.decode_data(raw, schema))

    def decode_data(self, raw: RawEvent, schema: EventSchema) -> Dict[str, Any]:
        sections = {
            True: WordStream(raw.keys[1:]),
            False: WordStream(raw.data_words),
        }
        decoded: Dict[str, Any] = {}

        for field in schema.fields:
            words = sections[field.is_key]
            if words.exhausted:
                continue

            word = words.take()
            try:
                if field.semantic_type is SemanticType.INTEGER:
                    decoded[field.name] = parse_word(word)

                elif field.semantic_type is SemanticType.WIDE_INTEGER:
                    low = parse_word(word)
                    high = 0
                    if not self.legacy_wide_integer and not words.exhausted:
                        word = words.take()
                        high = parse_word(word)
                    decoded[field.name] = from_uint256(low, high)

                else:
                    decoded[field.name] = word

            except ValueError as e:
                raise EventDecodeError(schema.name, field.name, word) from e

        return decoded
