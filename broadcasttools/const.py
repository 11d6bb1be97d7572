"""Constants for the Broadcast Tools library."""

# API endpoints
ENDPOINT_LOGIN = "/cgi-bin/postauth.cgi"
ENDPOINT_LOGOUT = "/cgi-bin/postlogout.cgi"
ENDPOINT_MONITOR = "/cgi-bin/getexchanger_monitor.cgi"

# Top-level key of the monitor payload holding the dynamic values
PAYLOAD_VALUES_KEY = "values"

METRIC_NAME = "broadcasttools"

# Suffix the device appends to temperature readings
TEMPERATURE_UNIT_SUFFIX = " *F"

ALLOWED_SCHEMES = ("http", "https")

DESCRIPTION = "Read metrics from one or many Broadcast Tools devices"

SAMPLE_CONFIG = """
  ## An array of URLs to gather stats from. i.e.,
  ##   http://example.com:3000
  urls = ["http://localhost:1776"]
  ## Username
  user = "admin"
  ## Password
  password = "password"
"""
