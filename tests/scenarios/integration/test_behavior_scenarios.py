"""Scenario-style integration tests for end-to-end conversion behaviors."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner
from xsd2avro.cli import cli
from xsd2avro.configuration import ConversionSettings
from xsd2avro.conversion import convert_schema, convert_schema_file
from xsd2avro.schema_index import SchemaIndex

PAYLOAD_XSD = """<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema"
           xmlns:evt="urn:acme:events:v3"
           targetNamespace="urn:acme:events:v3">
  <xs:element name="Envelope" type="xs:string"/>
  <xs:element name="payload" type="evt:Event"/>
  <xs:complexType name="Event">
    <xs:sequence>
      <xs:element name="kind" type="evt:Kind"/>
      <xs:element name="parent" type="evt:Event" minOccurs="0"/>
      <xs:element name="tag" type="xs:string" maxOccurs="unbounded"/>
      <xs:element name="tag" type="xs:string"/>
    </xs:sequence>
    <xs:attribute name="id" type="xs:long" use="required"/>
  </xs:complexType>
  <xs:simpleType name="Kind">
    <xs:restriction base="xs:string">
      <xs:enumeration value="created"/>
      <xs:enumeration value="re-opened"/>
    </xs:restriction>
  </xs:simpleType>
</xs:schema>
"""


def _write_file(path: Path, contents: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(contents, encoding="utf-8")
    return path


def test_payload_root_with_recursion_enum_and_duplicates() -> None:
    result = convert_schema(SchemaIndex.from_text(PAYLOAD_XSD), ConversionSettings())

    document = json.loads(result.compact_json)
    assert document["name"] == "payload"
    assert document["namespace"] == "acme.events.v3"
    assert document["fields"] == [
        {"name": "id", "type": "long"},
        {
            "name": "kind",
            "type": {"type": "enum", "name": "Kind", "symbols": ["CREATED", "RE_OPENED"]},
        },
        {
            "name": "parent",
            "type": [
                "null",
                {
                    "type": "record",
                    "name": "Event",
                    "namespace": "acme.events.v3",
                    "fields": [],
                },
            ],
        },
        {"name": "tag", "type": {"type": "array", "items": "string"}},
        {"name": "tag_1", "type": "string"},
    ]


def test_conversion_is_deterministic() -> None:
    first = convert_schema(SchemaIndex.from_text(PAYLOAD_XSD), ConversionSettings())
    second = convert_schema(SchemaIndex.from_text(PAYLOAD_XSD), ConversionSettings())

    assert first == second


def test_mutually_recursive_types_across_included_documents_terminate(tmp_path: Path) -> None:
    _write_file(
        tmp_path / "person.xsd",
        """<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">
  <xs:complexType name="Person">
    <xs:sequence><xs:element name="employer" type="Company" minOccurs="0"/></xs:sequence>
  </xs:complexType>
</xs:schema>""",
    )
    _write_file(
        tmp_path / "company.xsd",
        """<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">
  <xs:include schemaLocation="person.xsd"/>
  <xs:complexType name="Company">
    <xs:sequence><xs:element name="owner" type="Person" minOccurs="0"/></xs:sequence>
  </xs:complexType>
</xs:schema>""",
    )
    main = _write_file(
        tmp_path / "directory.xsd",
        """<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">
  <xs:include schemaLocation="company.xsd"/>
  <xs:element name="Directory" type="Person"/>
</xs:schema>""",
    )

    document = json.loads(convert_schema_file(main, ConversionSettings()).compact_json)

    employer = document["fields"][0]["type"][1]
    owner = employer["fields"][0]["type"][1]
    assert employer["name"] == "Company"
    assert owner == {
        "type": "record",
        "name": "Person",
        "namespace": "xsd2avro.generated",
        "fields": [],
    }


@pytest.mark.parametrize("pretty_flag", [[], ["--pretty"]])
def test_written_schema_is_parseable_in_both_layouts(tmp_path: Path, pretty_flag: list) -> None:
    source = _write_file(tmp_path / "events.xsd", PAYLOAD_XSD)
    output_dir = tmp_path / "out"
    runner = CliRunner()

    result = runner.invoke(
        cli, ["convert", "--in", str(source), "--out", str(output_dir), *pretty_flag]
    )

    assert result.exit_code == 0
    text = (output_dir / "events__payload.avsc").read_text(encoding="utf-8")
    expected = convert_schema(SchemaIndex.from_text(PAYLOAD_XSD), ConversionSettings())
    assert json.loads(text) == json.loads(expected.compact_json)
    assert ("\n" in text) is bool(pretty_flag)
