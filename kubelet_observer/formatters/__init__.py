from .json import json
from .pprint import pprint
from .table import table
from .yaml import yaml

__all__ = ["json", "pprint", "table", "yaml"]
