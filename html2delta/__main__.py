"""Allow running as: python -m html2delta"""

from html2delta.cli.main import main

main()
