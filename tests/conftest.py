"""Shared fixtures: sample invoice documents and throwaway resource directories."""

import logging
import shutil
from pathlib import Path

import pytest
import reportlab
from PIL import Image

from config import ConfigurationManager
from einvoice_pdf.model import parse_invoice
from einvoice_pdf.renderer import ResourceLoader
from einvoice_pdf.utils.logger import LOGGER_NAMESPACE

# Bundled with reportlab; stands in for the production CJK fonts.
VERA_FONT = Path(reportlab.__file__).parent / "fonts" / "Vera.ttf"

DEFAULT_ITEMS = [
    {
        "ItemName": "*信息技术服务*技术服务费",
        "SpecMod": "V2",
        "MeaUnits": "次",
        "Quantity": "1",
        "UnPrice": "283.018867924528",
        "Amount": "283.02",
        "TaxRate": "0.06",
        "ComTaxAm": "16.98",
    },
    {
        "ItemName": "*图书*技术手册",
        "SpecMod": "",
        "MeaUnits": "本",
        "Quantity": "2",
        "UnPrice": "50",
        "Amount": "100.00",
        "TaxRate": "免税",
        "ComTaxAm": "***",
    },
]

INVOICE_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<EInvoice{namespace}>
  <Header>
    <EIid>24322000000012345678</EIid>
    <EInvoiceTag>SWEI3200</EInvoiceTag>
    <Version>0.1</Version>
    <InherentLabel>
      <InIssuType><LabelCode>Y</LabelCode><LabelName>是</LabelName></InIssuType>
      <EInvoiceType><LabelCode>01</LabelCode><LabelName>电子发票</LabelName></EInvoiceType>
      <GeneralOrSpecialVAT><LabelCode>02</LabelCode><LabelName>普通发票</LabelName></GeneralOrSpecialVAT>
    </InherentLabel>
  </Header>
  <EInvoiceData>
    <SellerInformation>
      <SellerIdNum>91320000MA1ABCDE0X</SellerIdNum>
      <SellerName>南京示例科技有限公司</SellerName>
      <SellerAddr>南京市玄武区</SellerAddr>
    </SellerInformation>
    <BuyerInformation>
      <BuyerIdNum>91110000600012345Y</BuyerIdNum>
      <BuyerName>北京示例贸易有限公司</BuyerName>
    </BuyerInformation>
    <BasicInformation>
      <TotalAmWithoutTax>383.02</TotalAmWithoutTax>
      <TotalTaxAm>16.98</TotalTaxAm>
      <TotalTax-includedAmount>400.00</TotalTax-includedAmount>
      <TotalTax-includedAmountInChinese>肆佰圆整</TotalTax-includedAmountInChinese>
      <Drawer>张三</Drawer>
      <RequestTime>2024-03-05 10:21:30</RequestTime>
    </BasicInformation>
{items}
    <AdditionalInformation><Remark>{remark}</Remark></AdditionalInformation>
  </EInvoiceData>
  <TaxSupervisionInfo>
    <InvoiceNumber>24322000000012345678</InvoiceNumber>
    <IssueTime>2024-03-05 10:21:33</IssueTime>
    <TaxBureauCode>13200000000</TaxBureauCode>
  </TaxSupervisionInfo>
</EInvoice>
"""


def _item_xml(item: dict) -> str:
    fields = "".join(f"<{tag}>{value}</{tag}>" for tag, value in item.items())
    return f"    <IssuItemInformation>{fields}</IssuItemInformation>"


def make_invoice_xml(items=None, remark="项目编号：P-001", namespace=None, replace=None) -> bytes:
    """
    Build an invoice document.

    Args:
        items: List of item dicts (tag -> text); defaults to DEFAULT_ITEMS.
        remark: Remark text.
        namespace: Optional default namespace for the root element.
        replace: Optional {old: new} substitutions applied to the text.
    """
    text = INVOICE_TEMPLATE.format(
        namespace=f' xmlns="{namespace}"' if namespace else "",
        items="\n".join(_item_xml(item) for item in (DEFAULT_ITEMS if items is None else items)),
        remark=remark,
    )
    for old, new in (replace or {}).items():
        assert old in text, old
        text = text.replace(old, new)
    return text.encode("utf-8")


@pytest.fixture(autouse=True)
def reset_config():
    """Every test starts from the default settings.yaml."""
    ConfigurationManager.reset()
    yield
    ConfigurationManager.reset()


@pytest.fixture
def invoice_xml():
    return make_invoice_xml


@pytest.fixture
def invoice(invoice_xml):
    return parse_invoice(invoice_xml())


@pytest.fixture
def resources_dir(tmp_path):
    root = tmp_path / "resources"
    fonts = root / "fonts"
    fonts.mkdir(parents=True)
    for name in ("simkai.ttf", "simsun.ttf", "cour.ttf"):
        shutil.copy(VERA_FONT, fonts / name)

    images = root / "images"
    images.mkdir()
    Image.new("RGB", (14, 14), (128, 0, 0)).save(images / "total.gif")
    return root


@pytest.fixture
def render_context(resources_dir):
    return ResourceLoader(resources_dir).load()


@pytest.fixture
def app_log(caplog):
    """caplog wired to the application logger, which does not propagate once configured."""
    app_logger = logging.getLogger(LOGGER_NAMESPACE)
    propagate = app_logger.propagate
    app_logger.propagate = False
    app_logger.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAMESPACE)
    yield caplog
    app_logger.removeHandler(caplog.handler)
    app_logger.propagate = propagate
