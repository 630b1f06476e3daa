from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    애플리케이션의 설정을 관리하는 클래스입니다.
    환경 변수(.env 파일)에서 설정값을 읽어옵니다.
    """

    # API 설정: AI 모델 사용을 위한 키와 모델 이름
    anthropic_api_key: str = ""
    claude_model: str = "claude-sonnet-4-5-20250929"  # 사용할 Claude AI 모델 버전
    llm_max_tokens: int = 4000
    llm_timeout_seconds: float = 120.0
    llm_max_attempts: int = 1  # 1이면 재시도 없음
    llm_retry_delay: float = 2.0  # 재시도 시 기본 대기 시간(초), 지수 백오프

    # 크레딧 부족 시 사용자에게 안내할 결제 페이지
    billing_url: str = "https://console.anthropic.com/settings/billing"

    # 견적 계산 설정
    currency_precision: int = 2  # 금액 반올림 자릿수
    agency_name: str = "Netwave Interactive Marketing"

    # 저장소 설정
    data_dir: str = "data"
    catalog_path: Optional[str] = None  # 없으면 패키지에 포함된 app/data/catalog.json 사용

    # 업로드 제한
    max_file_size_mb: int = 20
    max_total_upload_mb: int = 50
    max_document_count: int = 10
    max_filename_length: int = 255

    # 서버 설정: 서버가 실행될 주소와 포트 번호
    host: str = "0.0.0.0"  # 모든 외부 접속 허용
    port: int = 8000
    allowed_origins: list[str] = ["*"]

    class Config:
        # 설정을 읽어올 파일 지정
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """
    설정을 가져오는 함수입니다.
    @lru_cache를 사용하여 한 번 읽은 설정은 메모리에 저장해두고 재사용합니다.
    """
    return Settings()
