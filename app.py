"""
Bikewatch - Streamlit GUI Application

Interactive map of bike lanes and bike-share station traffic with a
time-of-day filter.

Run with: streamlit run app.py
"""

import argparse
import logging
import sys

import streamlit as st

from bikewatch.maps import get_map_config, render_traffic_page

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Configure Streamlit page
st.set_page_config(
    page_title="Bikewatch",
    page_icon="🚲",
    layout="wide",
    initial_sidebar_state="expanded"
)


def parse_args(argv=None) -> argparse.Namespace:
    """Options passed after ``--`` on the streamlit command line."""
    parser = argparse.ArgumentParser(description="Bikewatch station traffic map")
    parser.add_argument("--config", default=None, help="Path to a JSON configuration file")
    return parser.parse_args(argv)


def main():
    args = parse_args(sys.argv[1:])
    config = get_map_config(args.config)
    logger.info(f"Using configuration from {config.config_path}")
    render_traffic_page(config)


if __name__ == "__main__":
    main()
