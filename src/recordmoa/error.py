# SPDX-License-Identifier: MIT

STORE_ERROR_MESSAGES: dict[str, str] = {
    "permission-denied": "접근 권한이 없습니다.",
    "not-found": "요청한 데이터를 찾을 수 없습니다.",
    "already-exists": "이미 존재하는 데이터입니다.",
    "failed-precondition": "작업을 수행할 수 없는 상태입니다.",
    "aborted": "작업이 중단되었습니다.",
    "out-of-range": "유효한 범위를 벗어났습니다.",
    "internal": "내부 오류가 발생했습니다.",
    "unavailable": "서비스를 일시적으로 사용할 수 없습니다.",
    "data-loss": "데이터 손실이 발생했습니다.",
    "unauthenticated": "인증이 필요합니다.",
    "default": "오류가 발생했습니다. 다시 시도해주세요.",
}


def store_error_message(code: str) -> str:
    """User-facing message for a record store error code."""
    return STORE_ERROR_MESSAGES.get(code, STORE_ERROR_MESSAGES["default"])
