from pathlib import Path

# Default template root shipped with flowgen
TEMPLATES_DIR = Path(__file__).parent
