from __future__ import annotations

from enum import IntEnum, StrEnum

SANDBOX_BASE_URL = "https://sandbox.duitku.com/webapi/api"
PRODUCTION_BASE_URL = "https://passport.duitku.com/webapi/api"

PAYMENT_METHODS_PATH = "merchant/paymentmethod/getpaymentmethod"
CREATE_TRANSACTION_PATH = "merchant/v2/inquiry"
TRANSACTION_STATUS_PATH = "merchant/transactionStatus"

DEFAULT_TIMEOUT_SECONDS = 30.0
REQUEST_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
CALLBACK_ACKNOWLEDGEMENT = "OK"


class Environment(StrEnum):
    SANDBOX = "sandbox"
    PRODUCTION = "production"


BASE_URLS = {
    Environment.SANDBOX: SANDBOX_BASE_URL,
    Environment.PRODUCTION: PRODUCTION_BASE_URL,
}

# Transaction / callback result codes
STATUS_SUCCESS = "00"
STATUS_PENDING = "01"
STATUS_FAILED = "02"
STATUS_CANCELLED = "03"
STATUS_EXPIRED = "04"

STATUS_DESCRIPTIONS = {
    STATUS_SUCCESS: "success",
    STATUS_PENDING: "pending",
    STATUS_FAILED: "failed",
    STATUS_CANCELLED: "cancelled",
    STATUS_EXPIRED: "expired",
}


class SubscriptionFrequency(IntEnum):
    DAILY = 1
    WEEKLY = 2
    MONTHLY = 3
    YEARLY = 4


# Credit card
PAYMENT_METHOD_CREDIT_CARD = "VC"

# Virtual accounts
PAYMENT_METHOD_BCA = "BC"
PAYMENT_METHOD_MANDIRI = "M2"
PAYMENT_METHOD_MAYBANK = "VA"
PAYMENT_METHOD_BNI = "I1"
PAYMENT_METHOD_CIMB = "B1"
PAYMENT_METHOD_PERMATA = "BT"
PAYMENT_METHOD_ATM_BERSAMA = "A1"
PAYMENT_METHOD_ARTHA_GRAHA = "AG"
PAYMENT_METHOD_NEO_COMMERCE = "NC"
PAYMENT_METHOD_BRI = "BR"
PAYMENT_METHOD_SAHABAT_SAMPOERNA = "S1"
PAYMENT_METHOD_DANAMON = "DM"
PAYMENT_METHOD_BSI = "BV"

# Retail outlets
PAYMENT_METHOD_RETAIL = "FT"
PAYMENT_METHOD_INDOMARET = "IR"

# E-wallets
PAYMENT_METHOD_OVO = "OV"
PAYMENT_METHOD_SHOPEEPAY_APPS = "SA"
PAYMENT_METHOD_LINKAJA_FIXED = "LF"
PAYMENT_METHOD_LINKAJA = "LA"
PAYMENT_METHOD_DANA = "DA"
PAYMENT_METHOD_SHOPEEPAY_LINK = "SL"
PAYMENT_METHOD_OVO_LINK = "OL"
PAYMENT_METHOD_JENIUS_PAY = "JP"

# QRIS
PAYMENT_METHOD_QRIS_SHOPEEPAY = "SP"
PAYMENT_METHOD_QRIS_NOBU = "NQ"
PAYMENT_METHOD_QRIS_GUDANG_VOUCHER = "GQ"

# Paylater
PAYMENT_METHOD_INDODANA = "DN"
PAYMENT_METHOD_ATOME = "AT"

PAYMENT_METHOD_NAMES = {
    PAYMENT_METHOD_CREDIT_CARD: "Credit Card (Visa / Master Card / JCB)",
    PAYMENT_METHOD_BCA: "BCA Virtual Account",
    PAYMENT_METHOD_MANDIRI: "Mandiri Virtual Account",
    PAYMENT_METHOD_MAYBANK: "Maybank Virtual Account",
    PAYMENT_METHOD_BNI: "BNI Virtual Account",
    PAYMENT_METHOD_CIMB: "CIMB Niaga Virtual Account",
    PAYMENT_METHOD_PERMATA: "Permata Bank Virtual Account",
    PAYMENT_METHOD_ATM_BERSAMA: "ATM Bersama",
    PAYMENT_METHOD_ARTHA_GRAHA: "Bank Artha Graha",
    PAYMENT_METHOD_NEO_COMMERCE: "Bank Neo Commerce",
    PAYMENT_METHOD_BRI: "BRIVA",
    PAYMENT_METHOD_SAHABAT_SAMPOERNA: "Bank Sahabat Sampoerna",
    PAYMENT_METHOD_DANAMON: "Danamon Virtual Account",
    PAYMENT_METHOD_BSI: "BSI Virtual Account",
    PAYMENT_METHOD_RETAIL: "Pegadaian / ALFA / Pos",
    PAYMENT_METHOD_INDOMARET: "Indomaret",
    PAYMENT_METHOD_OVO: "OVO",
    PAYMENT_METHOD_SHOPEEPAY_APPS: "ShopeePay Apps",
    PAYMENT_METHOD_LINKAJA_FIXED: "LinkAja Apps (Fixed Fee)",
    PAYMENT_METHOD_LINKAJA: "LinkAja Apps (Percentage Fee)",
    PAYMENT_METHOD_DANA: "DANA",
    PAYMENT_METHOD_SHOPEEPAY_LINK: "ShopeePay Account Link",
    PAYMENT_METHOD_OVO_LINK: "OVO Account Link",
    PAYMENT_METHOD_JENIUS_PAY: "Jenius Pay",
    PAYMENT_METHOD_QRIS_SHOPEEPAY: "QRIS ShopeePay",
    PAYMENT_METHOD_QRIS_NOBU: "QRIS Nobu",
    PAYMENT_METHOD_QRIS_GUDANG_VOUCHER: "QRIS Gudang Voucher",
    PAYMENT_METHOD_INDODANA: "Indodana Paylater",
    PAYMENT_METHOD_ATOME: "Atome",
}
