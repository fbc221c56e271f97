from fastapi import HTTPException


class ValidationError(HTTPException):
    """필수 값 누락 또는 형식 오류"""

    def __init__(self, detail: str = "Missing required fields") -> None:
        super().__init__(status_code=400, detail=detail)


class AuthenticationError(HTTPException):
    """토큰 누락(401) 또는 검증 실패(403)"""

    def __init__(self, detail: str, status_code: int = 401) -> None:
        super().__init__(status_code=status_code, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Not found") -> None:
        super().__init__(status_code=404, detail=detail)
