"""도메인 모듈"""
