"""Finnish invoice payment data: creditor reference numbers and bank barcodes."""
