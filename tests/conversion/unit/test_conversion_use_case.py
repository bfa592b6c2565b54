"""Conversion use-case tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from xsd2avro.configuration import ConversionSettings, OutputNaming
from xsd2avro.conversion import ConversionError, convert_schema, convert_schema_file, output_name
from xsd2avro.schema_index import SchemaIndex

ORDER_XSD = """<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">
  <xs:element name="Order">
    <xs:complexType>
      <xs:sequence>
        <xs:element name="id" type="xs:string"/>
        <xs:element name="line" type="Line" minOccurs="0" maxOccurs="unbounded"/>
      </xs:sequence>
    </xs:complexType>
  </xs:element>
  <xs:complexType name="Line">
    <xs:sequence>
      <xs:element name="sku" type="xs:string"/>
      <xs:element name="qty" type="xs:int"/>
    </xs:sequence>
  </xs:complexType>
</xs:schema>
"""

CUSTOMER_XSD = """<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema"
           targetNamespace="http://example.com/orders/v1">
  <xs:element name="Customer">
    <xs:complexType>
      <xs:sequence>
        <xs:element name="address">
          <xs:complexType>
            <xs:sequence>
              <xs:element name="city" type="xs:string"/>
              <xs:element name="zip" type="xs:int"/>
            </xs:sequence>
          </xs:complexType>
        </xs:element>
      </xs:sequence>
    </xs:complexType>
  </xs:element>
</xs:schema>
"""


def test_converts_order_document() -> None:
    result = convert_schema(SchemaIndex.from_text(ORDER_XSD), ConversionSettings())

    assert result.record_name == "Order"
    assert result.namespace == "xsd2avro.generated"
    assert json.loads(result.compact_json) == {
        "type": "record",
        "name": "Order",
        "namespace": "xsd2avro.generated",
        "fields": [
            {"name": "id", "type": "string"},
            {
                "name": "line",
                "type": [
                    "null",
                    {
                        "type": "array",
                        "items": {
                            "type": "record",
                            "name": "Line",
                            "namespace": "xsd2avro.generated",
                            "fields": [
                                {"name": "sku", "type": "string"},
                                {"name": "qty", "type": "int"},
                            ],
                        },
                    },
                ],
            },
        ],
    }
    assert json.loads(result.pretty_json) == json.loads(result.compact_json)
    assert result.text(pretty=True) == result.pretty_json
    assert result.text(pretty=False) == result.compact_json


def test_flattens_top_level_records_and_derives_namespace() -> None:
    settings = ConversionSettings(flatten_top_level=True)

    result = convert_schema(SchemaIndex.from_text(CUSTOMER_XSD), settings)

    document = json.loads(result.compact_json)
    assert document["namespace"] == "example_com.orders.v1"
    assert document["fields"] == [
        {"name": "addressCity", "type": "string"},
        {"name": "addressZip", "type": "int"},
    ]


def test_applies_naming_and_force_string_settings() -> None:
    settings = ConversionSettings(
        record_name="OrderEvent",
        namespace="com.acme",
        force_string_fields=frozenset({"qty"}),
    )

    result = convert_schema(SchemaIndex.from_text(ORDER_XSD), settings)

    document = json.loads(result.compact_json)
    assert document["name"] == "OrderEvent"
    assert document["namespace"] == "com.acme"
    line = document["fields"][1]["type"][1]["items"]
    assert line["namespace"] == "com.acme"
    assert line["fields"][1] == {"name": "qty", "type": "string"}


def test_simple_typed_root_becomes_single_field_record() -> None:
    index = SchemaIndex.from_text(
        '<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">'
        '<xs:element name="Count" type="xs:long"/></xs:schema>'
    )

    document = json.loads(convert_schema(index, ConversionSettings()).compact_json)

    assert document["name"] == "Count"
    assert document["fields"] == [{"name": "Count", "type": "long"}]


def test_missing_root_raises_conversion_error() -> None:
    settings = ConversionSettings(root_name="Invoice")

    with pytest.raises(ConversionError, match="Root element 'Invoice' not found."):
        convert_schema(SchemaIndex.from_text(ORDER_XSD), settings)


def test_document_without_elements_raises_conversion_error() -> None:
    index = SchemaIndex.from_text(
        '<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema"/>'
    )

    with pytest.raises(ConversionError, match="No global elements in XSDs."):
        convert_schema(index, ConversionSettings())


def test_convert_schema_file_wraps_load_errors(tmp_path: Path) -> None:
    broken = tmp_path / "broken.xsd"
    broken.write_text("<xs:schema", encoding="utf-8")

    with pytest.raises(ConversionError, match="Failed to parse"):
        convert_schema_file(broken, ConversionSettings())


@pytest.mark.parametrize(
    ("naming", "file_base", "record_name", "expected"),
    [
        (OutputNaming.ROOT, "order", "Order", "Order"),
        (OutputNaming.FILE, "order", "Order", "order"),
        (OutputNaming.FILE_AND_ROOT, "order", "Order", "order__Order"),
        (OutputNaming.ROOT, "order", " ", "Record"),
        (OutputNaming.FILE, "", "Order", "xsd"),
        (OutputNaming.FILE_AND_ROOT, "", "", "xsd__Record"),
    ],
)
def test_output_name(
    naming: OutputNaming, file_base: str, record_name: str, expected: str
) -> None:
    assert output_name(naming, file_base, record_name) == expected
