"""Declarative field schemas for objects configured from text.

A class lists its externally configurable fields once, in order, in FIELDS.
The same ordered schema drives positional binding (model parameters typed on
the command line, columns of a CSV row) and interactive binding (one prompt
per field).
"""

import logging
from dataclasses import dataclass
from operator import attrgetter
from typing import Any, Callable

from value_parsers import Parser
from titanic_errors import ArgumentCountMismatch, ParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldBinding:
    """A named, parsed field with get/set access on instances of its owner."""

    name: str
    parser: Parser
    getter: Callable[[Any], Any]
    setter: Callable[[Any, Any], None]

    def get(self, obj):
        return self.getter(obj)

    def set(self, obj, value):
        self.setter(obj, value)

    def parse_into(self, obj, text):
        """Parse text and assign the result to this field of obj."""
        self.setter(obj, self.parser.parse(text))

    def format(self, obj):
        return self.parser.format(self.getter(obj))


def attribute_field(name, attribute, parser):
    """Build a FieldBinding over a plain instance attribute.

    Args:
        name: External field name (CSV column, prompt label)
        attribute: Python attribute holding the value
        parser: Parser for the field's text form

    Returns:
        FieldBinding instance
    """
    def setter(obj, value):
        setattr(obj, attribute, value)

    return FieldBinding(name, parser, attrgetter(attribute), setter)


class Bindable:
    """Mixin for classes configurable from text through their FIELDS schema."""

    FIELDS = ()

    @classmethod
    def field_names(cls):
        return [field.name for field in cls.FIELDS]

    @classmethod
    def field(cls, name):
        """Return the FieldBinding called `name`.

        Raises:
            KeyError: If the schema has no such field
        """
        for field in cls.FIELDS:
            if field.name == name:
                return field
        raise KeyError(name)

    @classmethod
    def from_values(cls, values):
        """Create an instance and bind `values` onto it positionally."""
        return cls().bind_values(values)

    def bind_values(self, values):
        """Assign values[i] to the i-th schema field, in schema order.

        The argument count is checked before anything is assigned. A parse
        failure on field i leaves fields 0..i-1 already set.

        Args:
            values: Sequence of strings, one per schema field

        Returns:
            self, so calls can be chained after construction

        Raises:
            ArgumentCountMismatch: If len(values) differs from the schema length
            ParseError: If a value doesn't parse for its field
        """
        fields = type(self).FIELDS
        if len(values) != len(fields):
            raise ArgumentCountMismatch(type(self).__name__, len(fields), len(values))

        for field, text in zip(fields, values):
            field.parse_into(self, text)

        logger.debug("Bound %d field(s) on %s", len(fields), type(self).__name__)
        return self

    def bind_interactive(self, ui):
        """Prompt for every schema field in order until each one parses.

        Args:
            ui: Object with print_message(), print_error() and get_line()

        Returns:
            self
        """
        ui.print_message(f"Manual definition of {type(self).__name__}:")
        for field in type(self).FIELDS:
            ui.print_message(
                f"Enter a value for {field.name}. Expected format: {field.parser.expected_format()}"
            )
            while True:
                try:
                    field.parse_into(self, ui.get_line())
                    break
                except ParseError as e:
                    ui.print_error(str(e))
        return self

    def field_values(self):
        """Return the ordered list of (field name, current value) pairs."""
        return [(field.name, field.get(self)) for field in type(self).FIELDS]

    def field_texts(self):
        """Return current field values written back to text, in schema order."""
        return [field.format(self) for field in type(self).FIELDS]
