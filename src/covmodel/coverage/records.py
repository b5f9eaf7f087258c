"""Typed records decoded from JaCoCo XML elements.

Structure:
<report name="...">
  <package name="com/example">
    <class name="com/example/Foo" sourcefilename="Foo.java">
      <method name="bar" desc="(I)V" line="10">
        <counter type="LINE" missed="5" covered="10"/>
        <counter type="BRANCH" missed="2" covered="4"/>
      </method>
    </class>
    <class name="com/example/Foo$Inner" sourcefilename="Foo.java">...</class>
    <sourcefile name="Foo.java">
      <line nr="10" mi="0" ci="5" mb="0" cb="0"/>
      <line nr="11" mi="3" ci="2" mb="1" cb="1"/>
    </sourcefile>
  </package>
</report>

Decoding is two-step. decode_package() reads only package, class and source
file headers; decode_methods() and decode_lines() read the bodies of the
classes and files that survive filtering. Absent optional attributes become
explicit defaults, and malformed numbers raise ReportError when decoded.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from covmodel.config.constants import NESTED_CLASS_SEPARATOR
from covmodel.core.errors import ReportError


@dataclass(frozen=True, slots=True)
class LineRecord:
    number: int
    missed_instructions: int = 0
    covered_instructions: int = 0
    missed_branches: int = 0
    covered_branches: int = 0


@dataclass(frozen=True, slots=True)
class CounterRecord:
    type: str
    missed: int
    covered: int

    @property
    def total(self) -> int:
        return self.missed + self.covered


@dataclass(frozen=True, slots=True)
class MethodRecord:
    name: str
    descriptor: str
    line: int | None = None
    counters: tuple[CounterRecord, ...] = ()

    @property
    def full_name(self) -> str:
        return self.name + self.descriptor

    def counter(self, counter_type: str) -> CounterRecord | None:
        """First counter of the given type, if any."""
        return next((c for c in self.counters if c.type == counter_type), None)


@dataclass(frozen=True, slots=True)
class ClassRecord:
    """Class header. The <method> children stay undecoded until decode_methods()."""

    name: str
    source_file_name: str | None = None
    element: ET.Element | None = field(default=None, repr=False, compare=False)

    def belongs_to(self, class_name: str) -> bool:
        """True for the class itself and for its nested classes."""
        return self.name == class_name or self.name.startswith(class_name + NESTED_CLASS_SEPARATOR)


@dataclass(frozen=True, slots=True)
class SourceFileRecord:
    """Source file header. The <line> children stay undecoded until decode_lines()."""

    name: str
    element: ET.Element | None = field(default=None, repr=False, compare=False)


@dataclass(frozen=True, slots=True)
class PackageRecord:
    name: str
    classes: tuple[ClassRecord, ...] = field(default=())
    source_files: tuple[SourceFileRecord, ...] = field(default=())


# =============================================================================
# Decoding
# =============================================================================

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _int(element: ET.Element, attribute: str, default: int | None = None) -> int:
    raw = element.get(attribute)
    if raw is None:
        if default is None:
            raise ReportError.malformed_number(element.tag, attribute, None)
        return default
    text = raw.strip()
    # ASCII digits only, no digit separators
    if _INTEGER.fullmatch(text) is None:
        raise ReportError.malformed_number(element.tag, attribute, raw)
    return int(text)


def _optional_int(element: ET.Element, attribute: str) -> int | None:
    if element.get(attribute) is None:
        return None
    return _int(element, attribute)


def decode_line(element: ET.Element) -> LineRecord:
    number = _int(element, "nr")
    # Line numbers are 1-based; index 0 of the coverage array is a sentinel.
    if number < 1:
        raise ReportError.malformed_number(element.tag, "nr", element.get("nr"))
    return LineRecord(
        number=number,
        missed_instructions=_int(element, "mi", 0),
        covered_instructions=_int(element, "ci", 0),
        missed_branches=_int(element, "mb", 0),
        covered_branches=_int(element, "cb", 0),
    )


def decode_counter(element: ET.Element) -> CounterRecord:
    # Integral values only; JaCoCo never writes fractional counters such as "10.0".
    return CounterRecord(
        type=element.get("type", ""),
        missed=_int(element, "missed"),
        covered=_int(element, "covered"),
    )


def decode_method(element: ET.Element) -> MethodRecord:
    return MethodRecord(
        name=element.get("name", ""),
        descriptor=element.get("desc", ""),
        line=_optional_int(element, "line"),
        counters=tuple(decode_counter(c) for c in element.findall("counter")),
    )


def decode_class(element: ET.Element) -> ClassRecord:
    return ClassRecord(
        name=element.get("name", ""),
        source_file_name=element.get("sourcefilename"),
        element=element,
    )


def decode_source_file(element: ET.Element) -> SourceFileRecord:
    return SourceFileRecord(name=element.get("name", ""), element=element)


def decode_package(element: ET.Element) -> PackageRecord:
    """Decode package, class and source file headers only."""
    return PackageRecord(
        name=element.get("name", ""),
        classes=tuple(decode_class(c) for c in element.findall("class")),
        source_files=tuple(decode_source_file(s) for s in element.findall("sourcefile")),
    )


def decode_methods(record: ClassRecord) -> tuple[MethodRecord, ...]:
    if record.element is None:
        return ()
    return tuple(decode_method(m) for m in record.element.findall("method"))


def decode_lines(record: SourceFileRecord) -> tuple[LineRecord, ...]:
    if record.element is None:
        return ()
    return tuple(decode_line(line) for line in record.element.findall("line"))
