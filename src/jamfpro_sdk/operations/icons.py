# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Self Service icon operations namespace."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models.icon import Icon

if TYPE_CHECKING:
    from ..client import JamfProClient

URI_ICON = "/api/v1/icon"
URI_ICON_DOWNLOAD = "/api/v1/icon/download"


class IconOperations:
    """
    Self Service icon upload and download through the Jamf Pro API.

    Accessed via ``client.icons``.

    Example::

        icon = client.icons.upload("/path/to/logo.png")
        png = client.icons.download(icon.id)
    """

    def __init__(self, client: "JamfProClient") -> None:
        self._client = client

    def get_by_id(self, icon_id: int) -> Icon:
        return self._client.dispatch("GET", f"{URI_ICON}/{icon_id}", out_shape=Icon).value

    def upload(self, file_path: str) -> Icon:
        """
        Upload an image file as a multipart ``file`` part.

        :param file_path: Path of the image to upload.
        :type file_path: str
        :rtype: ~jamfpro_sdk.models.icon.Icon
        :raises ValidationError: If the file cannot be read.
        """
        return self._client.dispatch_multipart("POST", URI_ICON, files={"file": file_path}, out_shape=Icon).value

    def download(self, icon_id: int, resolution: str = "original", scale: int = 0) -> bytes:
        """
        Download the icon image.

        :param resolution: ``original``, ``300`` or ``512``.
        :param scale: Scale factor; ``0`` keeps the uploaded size.
        :return: Raw image bytes.
        :rtype: bytes
        """
        path = f"{URI_ICON_DOWNLOAD}/{icon_id}?res={resolution}&scale={scale}"
        return self._client.dispatch("GET", path, out_shape=bytes).value
