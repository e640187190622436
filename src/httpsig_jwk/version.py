"""Version information for httpsig-jwk"""

__version__ = "0.1.0"
