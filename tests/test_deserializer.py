"""Tests for binding invoice XML to the EInvoice model."""

import dataclasses
from datetime import datetime

import pytest

from einvoice_pdf.model import EInvoice, load_invoice, parse_invoice
from einvoice_pdf.utils.exceptions import ParseError


def test_parse_populates_every_block(invoice):
    assert isinstance(invoice, EInvoice)
    assert invoice.header.einvoice_type.name == "电子发票"
    assert invoice.header.einvoice_type.code == "01"
    assert invoice.header.vat_category.name == "普通发票"
    assert invoice.header.title == "电子发票（普通发票）"

    assert invoice.invoice_number == "24322000000012345678"
    assert invoice.tax_supervision_info.issue_time == datetime(2024, 3, 5, 10, 21, 33)

    assert invoice.buyer.name == "北京示例贸易有限公司"
    assert invoice.buyer.id_num == "91110000600012345Y"
    assert invoice.seller.name == "南京示例科技有限公司"
    assert invoice.seller.id_num == "91320000MA1ABCDE0X"

    basic = invoice.basic_information
    assert basic.total_am_without_tax == "383.02"
    assert basic.total_tax_am == "16.98"
    assert basic.total_tax_included_amount == "400.00"
    assert basic.total_tax_included_amount_in_chinese == "肆佰圆整"
    assert basic.drawer == "张三"

    assert invoice.additional_information.remark == "项目编号：P-001"


def test_items_keep_document_order_and_verbatim_values(invoice):
    assert [item.item_name for item in invoice.items] == [
        "*信息技术服务*技术服务费",
        "*图书*技术手册",
    ]
    first = invoice.items[0]
    assert first.un_price == "283.018867924528"
    assert first.tax_rate == "0.06"
    assert invoice.items[1].tax_rate == "免税"
    assert invoice.items[1].spec_mod == ""


def test_invoice_is_immutable(invoice):
    with pytest.raises(dataclasses.FrozenInstanceError):
        invoice.buyer.name = "other"
    assert isinstance(invoice.items, tuple)


def test_optional_item_fields_may_be_absent(invoice_xml):
    items = [{"ItemName": "咨询服务", "Amount": "10.00", "TaxRate": "0.06", "ComTaxAm": "0.60"}]
    parsed = parse_invoice(invoice_xml(items=items))

    item = parsed.items[0]
    assert (item.spec_mod, item.mea_units, item.quantity, item.un_price) == ("", "", "", "")


def test_missing_remark_block_yields_empty_remark(invoice_xml):
    data = invoice_xml(replace={
        "    <AdditionalInformation><Remark>项目编号：P-001</Remark></AdditionalInformation>\n": ""
    })
    assert parse_invoice(data).additional_information.remark == ""


def test_invoice_without_items_is_accepted(invoice_xml):
    assert parse_invoice(invoice_xml(items=[])).items == ()


def test_unknown_elements_are_ignored(invoice_xml):
    data = invoice_xml(replace={"<Drawer>张三</Drawer>": "<Drawer>张三</Drawer><Reviewer>李四</Reviewer>"})
    assert parse_invoice(data).basic_information.drawer == "张三"


def test_namespaced_document_is_accepted(invoice_xml):
    parsed = parse_invoice(invoice_xml(namespace="urn:example:einvoice"))
    assert parsed.seller.name == "南京示例科技有限公司"


@pytest.mark.parametrize("removed, element", [
    ("<Drawer>张三</Drawer>", "EInvoiceData/BasicInformation/Drawer"),
    ("<InvoiceNumber>24322000000012345678</InvoiceNumber>", "TaxSupervisionInfo/InvoiceNumber"),
    ("<BuyerIdNum>91110000600012345Y</BuyerIdNum>", "EInvoiceData/BuyerInformation/BuyerIdNum"),
    ("<TotalTax-includedAmount>400.00</TotalTax-includedAmount>",
     "EInvoiceData/BasicInformation/TotalTax-includedAmount"),
])
def test_missing_required_element_raises(invoice_xml, removed, element):
    with pytest.raises(ParseError) as exc_info:
        parse_invoice(invoice_xml(replace={removed: ""}), source="broken.xml")

    assert exc_info.value.details["element"] == element
    assert exc_info.value.details["source"] == "broken.xml"


def test_missing_item_amount_raises(invoice_xml):
    items = [{"ItemName": "咨询服务", "TaxRate": "0.06", "ComTaxAm": "0.60"}]
    with pytest.raises(ParseError, match="Missing required element"):
        parse_invoice(invoice_xml(items=items))


ISSUE_TIME = "<IssueTime>2024-03-05 10:21:33</IssueTime>"


@pytest.mark.parametrize("raw", ["yesterday-ish", "2024", "10:21:33", "March", "2024-03"])
def test_unparsable_or_incomplete_issue_time_raises(invoice_xml, raw):
    data = invoice_xml(replace={ISSUE_TIME: f"<IssueTime>{raw}</IssueTime>"})
    with pytest.raises(ParseError, match="Invalid issue time") as exc_info:
        parse_invoice(data)
    assert exc_info.value.details["element"] == "TaxSupervisionInfo/IssueTime"


@pytest.mark.parametrize("raw, expected", [
    ("2024-03-05T10:21:33", datetime(2024, 3, 5, 10, 21, 33)),
    ("2024-03-05", datetime(2024, 3, 5)),
    ("2024/03/05 10:21", datetime(2024, 3, 5, 10, 21)),
])
def test_complete_issue_time_layouts_are_accepted(invoice_xml, raw, expected):
    data = invoice_xml(replace={ISSUE_TIME: f"<IssueTime>{raw}</IssueTime>"})
    assert parse_invoice(data).tax_supervision_info.issue_time == expected


def test_malformed_xml_raises():
    with pytest.raises(ParseError, match="Malformed XML"):
        parse_invoice(b"<EInvoice><Header></EInvoice>")


def test_wrong_root_element_raises():
    with pytest.raises(ParseError, match="Unexpected root element"):
        parse_invoice(b"<Invoice/>")


def test_entity_expansion_is_rejected():
    bomb = (
        b'<?xml version="1.0"?>'
        b'<!DOCTYPE EInvoice [<!ENTITY a "aaaaaaaaaa">]>'
        b'<EInvoice>&a;</EInvoice>'
    )
    with pytest.raises(ParseError):
        parse_invoice(bomb)


def test_load_invoice_reads_file(tmp_path, invoice_xml):
    path = tmp_path / "24322000000012345678.xml"
    path.write_bytes(invoice_xml())

    assert load_invoice(path).invoice_number == "24322000000012345678"
