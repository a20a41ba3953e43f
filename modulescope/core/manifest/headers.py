from __future__ import annotations

# Standard manifest header names read by the views.
BUNDLE_NAME = "Bundle-Name"
BUNDLE_DESCRIPTION = "Bundle-Description"
BUNDLE_DOCURL = "Bundle-DocURL"
FRAGMENT_HOST = "Fragment-Host"
IMPORT_PACKAGE = "Import-Package"
EXPORT_PACKAGE = "Export-Package"

# Clause parameters.
VERSION_ATTRIBUTE = "version"
LEGACY_VERSION_ATTRIBUTE = "specification-version"
RESOLUTION_DIRECTIVE = "resolution"
RESOLUTION_OPTIONAL = "optional"
