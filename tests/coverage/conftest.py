"""Shared JaCoCo report fixtures."""

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

REPORT_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<!DOCTYPE report PUBLIC "-//JACOCO//DTD Report 1.1//EN" "report.dtd">
<report name="example">
    <package name="com/example/io">
        <class name="com/example/io/Reader" sourcefilename="Reader.java">
            <method name="read" desc="()Ljava/lang/String;" line="4">
                <counter type="INSTRUCTION" missed="3" covered="2"/>
                <counter type="BRANCH" missed="0" covered="0"/>
                <counter type="LINE" missed="1" covered="1"/>
            </method>
        </class>
        <sourcefile name="Reader.java">
            <line nr="4" mi="1" ci="2" mb="0" cb="2"/>
            <line nr="5" mi="2" ci="0" mb="0" cb="0"/>
        </sourcefile>
    </package>
    <package name="com/example">
        <class name="com/example/Calculator" sourcefilename="Calculator.java">
            <method name="&lt;init&gt;" desc="()V" line="3">
                <counter type="LINE" missed="0" covered="1"/>
            </method>
            <method name="add" desc="(II)I" line="5">
                <counter type="LINE" missed="0" covered="1"/>
            </method>
            <method name="divide" desc="(II)I" line="9">
                <counter type="LINE" missed="1" covered="3"/>
                <counter type="BRANCH" missed="1" covered="1"/>
            </method>
            <method name="lambda$divide$0" desc="()V" line="12">
                <counter type="LINE" missed="0" covered="1"/>
            </method>
        </class>
        <class name="com/example/Calculator$Memory" sourcefilename="Calculator.java">
            <method name="store" desc="(I)V" line="20">
                <counter type="LINE" missed="2" covered="0"/>
            </method>
        </class>
        <class name="com/example/Legacy">
            <method name="run" desc="()V" line="1">
                <counter type="LINE" missed="0" covered="1"/>
            </method>
        </class>
        <sourcefile name="Calculator.java">
            <line nr="3" mi="0" ci="3" mb="0" cb="0"/>
            <line nr="5" mi="0" ci="4" mb="0" cb="0"/>
            <line nr="9" mi="0" ci="2" mb="1" cb="1"/>
            <line nr="10" mi="2" ci="1"/>
            <line nr="11" mi="3" ci="0"/>
            <line nr="12" ci="2"/>
            <line nr="20" mi="4" ci="0"/>
            <line nr="21" mi="1"/>
        </sourcefile>
    </package>
</report>
"""


@pytest.fixture
def report_tree() -> ET.ElementTree:
    return ET.ElementTree(ET.fromstring(REPORT_XML.encode("utf-8")))


@pytest.fixture
def report_path(tmp_path: Path) -> Path:
    path = tmp_path / "jacoco.xml"
    path.write_text(REPORT_XML, encoding="utf-8")
    return path

