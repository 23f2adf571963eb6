"""config_loading.py"""

import sys

from clippy.config import load_schema

cli = load_schema("clippy.yaml")

if __name__ == "__main__":
    print(cli.parse_all(sys.argv[1:]))
