# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Request and response shapes for the bundled Jamf Pro resource operations.

- :mod:`~jamfpro_sdk.models.department`: Classic API departments (XML).
- :mod:`~jamfpro_sdk.models.computer_group`: Classic API computer groups (XML).
- :mod:`~jamfpro_sdk.models.user_extension_attribute`: Classic API user extension attributes (XML).
- :mod:`~jamfpro_sdk.models.site`: site reference shared by Classic API resources.
- :mod:`~jamfpro_sdk.models.api_role`: Jamf Pro API roles (JSON).
- :mod:`~jamfpro_sdk.models.sso_failover`: SSO failover settings (JSON).
- :mod:`~jamfpro_sdk.models.icon`: Self Service icons (JSON and binary).

Note:
    This ``__init__.py`` does NOT import/export models. Import directly from
    the specific module files.
"""

__all__ = []
