"""
Secret Letters Service

비밀 코드로 주고받는 익명 편지 서비스
- 비밀 코드 기반 편지 전송/조회
- 편지당 한 번의 답장
- 24시간 후 자동 만료 및 정리
"""

__version__ = "1.0.0"
