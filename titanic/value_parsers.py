"""Text-to-value parsers used to configure models and read passenger records.

Each parser turns one piece of text into a typed value or raises ParseError.
The inverse, format(), writes a parsed value back to text so that bound
values can be re-serialized (for example when duplicating a model).
"""

import math

from titanic_errors import ParseError


class Parser:
    """Base parser. Subclasses implement parse() and may override format()."""

    type_name = "value"

    def parse(self, text):
        """Parse text into a value.

        Args:
            text: Raw text to convert

        Returns:
            The parsed value

        Raises:
            ParseError: If the text cannot be converted
        """
        raise NotImplementedError

    def format(self, value):
        """Write a value produced by parse() back to text."""
        return str(value)

    def expected_format(self):
        """Return a short human-readable hint describing accepted input."""
        return self.type_name

    def fail(self, text):
        raise ParseError(self.type_name, text)


class StringParser(Parser):
    type_name = "str"

    def __init__(self, allow_empty=True):
        self.allow_empty = allow_empty

    def parse(self, text):
        if not self.allow_empty and text == "":
            self.fail(text)
        return text

    def format(self, value):
        return value

    def expected_format(self):
        return "text" if self.allow_empty else "non-empty text"


class IntParser(Parser):
    type_name = "int"

    def __init__(self, minimum=None):
        self.minimum = minimum

    def parse(self, text):
        try:
            value = int(text)
        except (TypeError, ValueError):
            self.fail(text)
        if self.minimum is not None and value < self.minimum:
            self.fail(text)
        return value

    def expected_format(self):
        if self.minimum == 0:
            return "non-negative int"
        if self.minimum is not None:
            return f"int >= {self.minimum}"
        return "int"


class FloatParser(Parser):
    type_name = "float"

    def __init__(self, minimum=None):
        self.minimum = minimum

    def parse(self, text):
        try:
            value = float(text)
        except (TypeError, ValueError):
            self.fail(text)
        # nan and inf parse fine with float() but are not usable record values
        if not math.isfinite(value):
            self.fail(text)
        if self.minimum is not None and value < self.minimum:
            self.fail(text)
        return value

    def format(self, value):
        return repr(value)

    def expected_format(self):
        if self.minimum == 0:
            return "non-negative number"
        return "number"


class BoolParser(Parser):
    """Parse 'true' or 'false' in any letter case."""

    type_name = "bool"

    def parse(self, text):
        normalized = text.strip().lower() if isinstance(text, str) else None
        if normalized == "true":
            return True
        if normalized == "false":
            return False
        self.fail(text)

    def expected_format(self):
        return "true or false"


class BoolFromIntParser(Parser):
    """Parse an integer as a boolean: 0 is False, anything else is True.

    The survival column of the Kaggle files is written as 0/1, which the
    plain BoolParser does not accept.
    """

    type_name = "bool"

    def __init__(self):
        self._ints = IntParser()

    def parse(self, text):
        try:
            return self._ints.parse(text) != 0
        except ParseError:
            self.fail(text)

    def format(self, value):
        return "1" if value else "0"

    def expected_format(self):
        return "0 or 1"


class EnumParser(Parser):
    """Parse an Enum member from its name or from the text of its value.

    Only declared members are accepted, so "4" is rejected for an enum whose
    values are 1, 2 and 3 even though it is a valid int.
    """

    def __init__(self, enum_cls):
        self.enum_cls = enum_cls
        self.type_name = enum_cls.__name__

    def parse(self, text):
        if not isinstance(text, str):
            self.fail(text)
        if text in self.enum_cls.__members__:
            return self.enum_cls[text]
        for member in self.enum_cls:
            if str(member.value) == text.strip():
                return member
        self.fail(text)

    def format(self, value):
        return value.name

    def expected_format(self):
        return "one of " + ", ".join(self.enum_cls.__members__)


class ChoiceParser(Parser):
    """Parse with a base parser, then require the result to be one of `choices`."""

    def __init__(self, base, choices, type_name=None):
        self.base = base
        self.choices = tuple(choices)
        self.type_name = type_name or base.type_name

    def parse(self, text):
        value = self.base.parse(text)
        if value not in self.choices:
            self.fail(text)
        return value

    def format(self, value):
        return self.base.format(value)

    def expected_format(self):
        return "one of " + ", ".join(self.base.format(choice) for choice in self.choices)


class OptionalParser(Parser):
    """Wrap a parser so that unparsable text means "no value".

    parse() never raises ParseError: text the base parser rejects maps to None.
    Missing values in the passenger files (empty Age, Cabin, ...) rely on this.
    """

    def __init__(self, base):
        self.base = base
        self.type_name = f"Optional[{base.type_name}]"

    def parse(self, text):
        try:
            return self.base.parse(text)
        except ParseError:
            return None

    def format(self, value):
        if value is None:
            return ""
        return self.base.format(value)

    def expected_format(self):
        return f"{self.base.expected_format()} (or empty)"


class SequenceParser(Parser):
    """Split text on a separator and parse every piece with a base parser.

    Fails as a whole if any piece fails; no partial list is returned.
    """

    def __init__(self, base, separator=","):
        self.base = base
        self.separator = separator
        self.type_name = f"list[{base.type_name}]"

    def parse(self, text):
        if not isinstance(text, str):
            self.fail(text)
        try:
            return [self.base.parse(piece) for piece in text.split(self.separator)]
        except ParseError:
            self.fail(text)

    def format(self, value):
        return self.separator.join(self.base.format(item) for item in value)

    def expected_format(self):
        return f"'{self.separator}'-separated list of {self.base.expected_format()}"
