"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASMODEL, licensed under the MIT License.
See LICENSE file for details.
"""

"""
OASMODEL - typed path and operation records for OpenAPI documents
Decodes the paths of an API description into records and encodes them back
"""

__version__ = "0.1.0"
