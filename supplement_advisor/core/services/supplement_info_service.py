from typing import Dict, Optional
from supplement_advisor.models.supplement import SupplementInfo
from supplement_advisor.utils.logger_config import setup_logger

logger = setup_logger('supplement_info')

NOT_FOUND_INFO = SupplementInfo(
    description='해당 영양제에 대한 정보를 찾을 수 없습니다.',
    benefits=[],
    dosage='제품 라벨을 참조하세요.'
)


class SupplementInfoService:
    """영양제 기본 정보 조회 (부분 일치)"""

    def __init__(self, info_table: Dict[str, Dict]):
        self.info = {name: SupplementInfo.model_validate(data) for name, data in info_table.items()}

    def find_key(self, supplement: str) -> Optional[str]:
        query = (supplement or '').strip().lower()
        if not query:
            return None
        for key in self.info:
            lowered = key.lower()
            if lowered in query or query in lowered:
                return key
        return None

    def lookup(self, supplement: str) -> SupplementInfo:
        matched = self.find_key(supplement)
        if matched:
            logger.info(f"[INFO] {supplement} -> {matched}")
            return self.info[matched]
        logger.info(f"[INFO] 정보 없음: {supplement}")
        return NOT_FOUND_INFO
