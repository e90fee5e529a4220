import os
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
ASSETS_DIR = os.environ.get("ASSETS_DIR", os.path.join(BASE_DIR, "attached_assets"))

PORT = int(os.environ.get("PORT", 5000))
DEBUG = os.environ.get("RENDER") is None  # debug only when running locally
SECRET_KEY = os.environ.get("SECRET_KEY", "dev-proposal-key")

# Asset file names inside ASSETS_DIR (all optional)
COVER_IMAGE_FILE = os.environ.get("COVER_IMAGE_FILE", "cover.png")
LOGO_IMAGE_FILE = os.environ.get("LOGO_IMAGE_FILE", "logo.png")
SIGNATURE_IMAGE_FILE = os.environ.get("SIGNATURE_IMAGE_FILE", "signature.png")

# Proposal economics
SHARE_PRICE = float(os.environ.get("SHARE_PRICE", 8))
CURRENCY_SYMBOL = os.environ.get("CURRENCY_SYMBOL", "R")

# Company boilerplate
COMPANY_NAME = os.environ.get("COMPANY_NAME", "OPIAN CAPITAL")
FOOTER_LINES = [
    "Opian Capital (Pty) Ltd is Licensed as a Juristic Representative with FSP No: 50974",
    "Company Registration Number: 2022/272376/07 FSP No: 50974",
    "Company Address: 260 Uys Krige Drive, Loevenstein, Bellville, 7530, Western Cape",
    "Tel: 0861 263 346 | Email: info@opianfsgroup.com | Website: www.opianfsgroup.com",
]

SIGNATORY_NAME = os.environ.get("SIGNATORY_NAME", "Investment Committee")
SIGNATORY_TITLE = os.environ.get("SIGNATORY_TITLE", "Opian Capital (Pty) Ltd")
SIGNATORY_CONTACT = os.environ.get("SIGNATORY_CONTACT", "info@opianfsgroup.com | 0861 263 346")
