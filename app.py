from flask import Flask
import os
import logging

from data_store import ARRIVAL_WINDOW_HOURS

# Configure logging - WARNING by default so log lines don't interleave with prompts
logging.basicConfig(level=os.environ.get('LOG_LEVEL', 'WARNING').upper())

# Initialize Flask app
app = Flask(__name__)

# Storage configuration
app.config['ROUTES_DATA_FILE'] = os.environ.get('ROUTES_DATA_FILE', 'bus_routes.json')
app.config['ACCOUNTS_DATA_FILE'] = os.environ.get('ACCOUNTS_DATA_FILE', 'user_accounts.json')

# Routes arriving less than this many hours before the entered time
app.config['ARRIVAL_WINDOW_HOURS'] = ARRIVAL_WINDOW_HOURS
