"""OpenPankki - Finnish bank account and invoice barcode toolkit.

Validates IBANs, converts Finnish domestic account numbers (BBAN) to and
from IBAN, checks Finnish creditor reference numbers and decodes the
54-character bank barcode printed on Finnish invoices.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "BankAccountNumber",
    "BankInfo",
    "FinnishBankAccountNumber",
    "FinnishBankInfo",
    "FinnishBankRegistry",
    "FinnishInvoiceBarcode",
    "FinnishReferenceNumber",
    "IBANFormats",
    "ReferenceNumber",
    "checksum97",
    "compose_barcode",
    "is_valid_iban",
    "is_valid_machine_bban",
    "is_valid_reference",
]

from .banking.account import BankAccountNumber, FinnishBankAccountNumber
from .banking.bank_info import BankInfo, FinnishBankInfo
from .banking.checksum import checksum97, is_valid_machine_bban
from .banking.iban import is_valid_iban
from .banking.iban_formats import IBANFormats
from .banking.registry import FinnishBankRegistry
from .invoice.barcode import FinnishInvoiceBarcode, compose_barcode
from .invoice.reference import FinnishReferenceNumber, ReferenceNumber, is_valid_reference
