"""도메인 모델, 저장소 문서 타입, API 스키마"""
