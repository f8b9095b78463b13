# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

import pendulum

type DeletionStatus = Literal["pending", "deleted", "failed"]


class PendingImageDeletion(TypedDict):
    public_id: str  # path below the images directory, without extension
    image_url: str
    status: DeletionStatus
    created_at: pendulum.DateTime
    deleted_at: Optional[pendulum.DateTime]
    failed_at: Optional[pendulum.DateTime]
    error: Optional[str]


class CleanupResult(TypedDict):
    deleted: int
    failed: int
