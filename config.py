"""
Configuration and constants for the plugin modernizer stats build and dashboard
"""
import os
import logging
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Upstream metadata repository
# Every plugin directory holds reports/aggregated_migrations.json, recipe rollups
# live under reports/recipes/ and the human-reviewed summary in reports/summary.md
METADATA_REPO = 'jenkins-infra/metadata-plugin-modernizer'
METADATA_BRANCH = 'main'
RAW_BASE = f'https://raw.githubusercontent.com/{METADATA_REPO}/{METADATA_BRANCH}'
API_BASE = f'https://api.github.com/repos/{METADATA_REPO}'

PLUGIN_REPORT_SUFFIX = '/reports/aggregated_migrations.json'
RECIPES_DIR = 'reports/recipes'
SUMMARY_PATH = 'reports/summary.md'

USER_AGENT = 'plugin-modernizer-stats'
ENV_GITHUB_TOKEN = 'GITHUB_TOKEN'

# Request configuration
# Each upstream call is a single bounded request, there is no retry loop
REQUEST_TIMEOUT = 30  # seconds

# Batch processing configuration
# OPTIMIZATION: Larger batches finish sooner but put more load on the raw content host
# - 10 = safe default
# - 20 = faster, use with a GITHUB_TOKEN
# - 5 = use if the unauthenticated rate limit is being hit
BATCH_SIZE = 10  # Plugin reports fetched concurrently per batch
BATCH_DELAY = 0.2  # Pause between batches in seconds (200ms)

# Output configuration
OUTPUT_DIR = os.path.join(os.getcwd(), 'public', 'data')
PLUGINS_BUNDLE = 'plugins.json'
RECIPES_BUNDLE = 'recipes.json'
SUMMARY_BUNDLE = 'summary.json'

# Logging configuration
# Console log level: DEBUG, INFO, WARNING, ERROR, CRITICAL
CONSOLE_LOG_LEVEL = logging.INFO  # Log level for console output
LOGS_DIR = os.getenv('MODERNIZER_LOGS_DIR', 'logs')

# Dashboard configuration
# Bundles are read from a URL prefix (http/https) or a local directory
DATA_BASE_URL = os.getenv('MODERNIZER_DATA_URL', OUTPUT_DIR)
DASHBOARD_HOST = os.getenv('DASHBOARD_HOST', '0.0.0.0')
DASHBOARD_PORT = int(os.getenv('DASHBOARD_PORT', '8002'))

PAGE_SIZE = 20  # Rows per page in the data explorer
PAGE_WINDOW = 5  # Page-number buttons shown around the current page
TOP_FAILING_RECIPES = 8  # Rows in the "top failing recipes" overview
TOP_RECIPES = 10  # Recipes in the success/failure overview chart

# Export filenames (downloads are always named the same)
EXPORT_CSV_FILENAME = 'plugin-modernizer-data.csv'
EXPORT_JSON_FILENAME = 'plugin-modernizer-data.json'

# Synthetic dataset used when bundles cannot be loaded
SAMPLE_DATA_SEED = 42
