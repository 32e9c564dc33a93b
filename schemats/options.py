"""Generation options and identifier naming."""

import re
from dataclasses import dataclass

import inflection

_NON_WORD = re.compile(r"[\W_]+")


@dataclass(frozen=True)
class Options:
    """Options resolved once per generation run."""
    camel_case: bool = False
    write_header: bool = True
    singular_table_names: bool = False
    meta: bool = False


def camel_case(name: str) -> str:
    """Convert ``user_accounts`` / ``user-accounts`` / ``UserAccounts`` to ``userAccounts``.

    Names with no word characters are returned unchanged.
    """
    words = _NON_WORD.sub("_", inflection.underscore(name)).strip("_")
    if not words:
        return name
    return inflection.camelize(words, uppercase_first_letter=False)


def upper_first(name: str) -> str:
    return name[:1].upper() + name[1:]


class NameTransformer:
    """Turns catalog identifiers into emitted TypeScript identifiers.

    Type names (tables, enums) may be singularized and camel-cased; column
    names may only be camel-cased. Singularization runs before camel-casing
    because the plural rules match on the trailing word.
    """

    def __init__(self, options: Options):
        self.options = options

    def _singularize(self, name: str) -> str:
        if not self.options.singular_table_names:
            return name
        return inflection.singularize(name)

    def _camel_case(self, name: str) -> str:
        if not self.options.camel_case:
            return name
        return camel_case(name)

    def transform_type_name(self, type_name: str) -> str:
        """Transform a table or enum name into a type identifier.

        With neither camel-casing nor singularization enabled the catalog
        name is kept verbatim. Otherwise the result always starts upper-case.
        """
        if not (self.options.camel_case or self.options.singular_table_names):
            return type_name
        transformed = self._singularize(type_name)
        transformed = self._camel_case(transformed)
        return upper_first(transformed)

    def transform_column_name(self, column_name: str) -> str:
        return self._camel_case(column_name)
