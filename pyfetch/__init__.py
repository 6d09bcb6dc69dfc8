"""
pyfetch

Minimal asynchronous HTTP(S) client with proxy, redirect and validation support

Copyright (c) 2026-present mrsnifo
License: MIT, see LICENSE for more details.
"""

__title__ = 'pyfetch'
__license__ = 'MIT License'
__author__ = 'mrsnifo'
__copyright__ = 'Copyright 2026-present mrsnifo'
__email__ = 'snifo@mail.com'
__version__ = '0.1.0'

from .options import RequestOptions
from .http import Response
from .pipeline import request
from .client import *
from .errors import *

from . import (
    utils as utils,
)
