"""Configuration settings for the Wallet Profit Dashboard."""

import os
from dotenv import load_dotenv

load_dotenv()

# API Endpoints
API_BASE_URL = os.getenv("WALLET_API_BASE_URL", "https://onchain.dextrading.com")
RANKINGS_PATH = "/valuable_wallets"
WALLET_SUMMARY_PATH = "/walletsummary/{wallet_address}"
NETWORK = os.getenv("WALLET_NETWORK", "eth")  # Sent as ?network= on both endpoints

# List endpoint query
RANKINGS_PAGE = 1
RANKINGS_LIMIT = 50  # Rows fetched once per list view

# Requests
REQUEST_TIMEOUT_SECONDS = float(os.getenv("WALLET_REQUEST_TIMEOUT", "15"))

# List view
ITEMS_PER_PAGE = 5
ADDRESS_EDGE = 4  # Chars kept on each side of a shortened address

# Logging
LOG_LEVEL = os.getenv("WALLET_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Chart colours
BUY_COLOR = "rgba(81, 236, 76, 0.941)"
SELL_COLOR = "rgb(241, 75, 75)"
TRANSACTIONS_COLOR = "rgba(54, 162, 235, 1)"
TRANSACTIONS_FILL = "rgba(54, 162, 235, 0.2)"
