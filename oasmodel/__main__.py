"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASMODEL, licensed under the MIT License.
See LICENSE file for details.
"""

from oasmodel.cli import app

if __name__ == "__main__":
    app()
