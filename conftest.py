import sys
from pathlib import Path

# Make the src/ layout importable when tests run from a checkout without installation
ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"

str_path = str(SRC)
if str_path not in sys.path:
    sys.path.insert(0, str_path)
