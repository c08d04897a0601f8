from decimal import Decimal

from decouple import Csv, config

PAYSTACK_BASE_URL = config("PAYSTACK_BASE_URL", default="https://api.paystack.co")
PAYSTACK_CURRENCY = config("PAYSTACK_CURRENCY", default="ZAR")
PAYSTACK_COUNTRY = config("PAYSTACK_COUNTRY", default="south africa")
PAYSTACK_SECRET_KEY = config("PAYSTACK_SECRET_KEY", default="")
PAYSTACK_PUBLIC_KEY = config("PAYSTACK_PUBLIC_KEY", default="")
PAYSTACK_TEST_SECRET_KEY = config("PAYSTACK_TEST_SECRET_KEY", default="sk_test_...")
PAYSTACK_TEST_PUBLIC_KEY = config("PAYSTACK_TEST_PUBLIC_KEY", default="pk_test_...")
PAYSTACK_TIMEOUT_SECONDS = config("PAYSTACK_TIMEOUT_SECONDS", default=30.0, cast=float)

DEFAULT_PLATFORM_FEE_PERCENT = config("DEFAULT_PLATFORM_FEE_PERCENT", cast=Decimal, default="15.00")
MINIMUM_WITHDRAWAL_AMOUNT = config("MINIMUM_WITHDRAWAL_AMOUNT", cast=Decimal, default="50")
PAYSTACK_PAYMENT_CHANNELS = config("PAYSTACK_PAYMENT_CHANNELS", default="card,eft,bank_transfer", cast=Csv())
