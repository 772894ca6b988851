"""Classifieds: Users / Ads 마이크로서비스와 게이트웨이"""
