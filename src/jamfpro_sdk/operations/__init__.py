# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Operation namespace classes for the Jamf Pro SDK.

This module contains the operation namespace classes that group resource
operations under intuitive namespaces:
- DepartmentOperations: Classic API departments
- ComputerGroupOperations: Classic API computer groups
- UserExtensionAttributeOperations: Classic API user extension attributes
- ApiRoleOperations: Jamf Pro API roles
- SsoFailoverOperations: SSO failover settings
- IconOperations: Self Service icon upload and download
"""

__all__ = []
