import textwrap
from pathlib import Path

import pytest

from code_duplicate_detector.models import CodeBlock


@pytest.fixture
def make_block():
    """Factory for CodeBlock objects; relative paths are kept as given."""
    def _make(file_path, start_line, end_line, content="return x;", language="javascript"):
        return CodeBlock(
            file_path=Path(file_path),
            start_line=start_line,
            end_line=end_line,
            content=content,
            language=language,
        )
    return _make


@pytest.fixture
def make_project(tmp_path):
    """Write {relative_path: source} into tmp_path and return the root."""
    def _make(files):
        for rel_path, source in files.items():
            path = tmp_path / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(source).lstrip("\n"), encoding="utf-8")
        return tmp_path
    return _make


PROCESS_ORDER = """
function processOrder(order) {
  if (!order) {
    return null;
  }
  const result = {
    id: order.id,
    items: order.items,
    total: order.total
  };
  return result;
}
"""

PROCESS_INVOICE = """
function processInvoice(invoice) {
  if (!invoice) {
    return null;
  }
  const result = {
    id: invoice.id,
    items: invoice.items,
    total: invoice.total
  };
  return result;
}
"""

VALIDATORS = """
function validateCreditCard(payment) {
  if (!payment.cardNumber) {
    return false;
  }
  if (payment.amount <= 0) {
    return false;
  }
  return true;
}

function validatePayPal(payment) {
  if (!payment.email) {
    return false;
  }
  if (payment.amount <= 0) {
    return false;
  }
  return true;
}

function validateCrypto(payment) {
  if (!payment.walletAddress) {
    return false;
  }
  if (payment.amount <= 0) {
    return false;
  }
  return true;
}
"""


@pytest.fixture
def order_project(make_project):
    """Two files, each holding one function that differs only in naming."""
    return make_project({
        "src/orders.js": PROCESS_ORDER,
        "src/invoices.js": PROCESS_INVOICE,
    })


@pytest.fixture
def validator_project(make_project):
    """Three same-shaped validators in one file."""
    return make_project({"src/validators.js": VALIDATORS})
