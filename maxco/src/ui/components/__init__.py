"""Shared UI components."""

from .notice_manager import NoticeManager, NoticeConfig, NoticeType

__all__ = ['NoticeManager', 'NoticeConfig', 'NoticeType']
