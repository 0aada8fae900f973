# custom_components/toronto_zmanim/const.py
DOMAIN = "toronto_zmanim"

CONF_CANDLELIGHT_OFFSET = "candlelighting_offset"
CONF_HAVDALAH_OFFSET = "havdalah_offset"
CONF_TIME_FORMAT = "time_format"

DEFAULT_CANDLELIGHT_OFFSET = 18
DEFAULT_HAVDALAH_OFFSET = 50
DEFAULT_TIME_FORMAT = "12"

# keys under hass.data[DOMAIN]
DATA_CONFIG = "config"
DATA_CALCULATOR = "calculator"
DATA_VIEW_REGISTERED = "view_registered"
