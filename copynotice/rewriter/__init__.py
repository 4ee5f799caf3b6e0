"""
copynotice Rewriter Module
"""

from .notice_rewriter import NoticeRewriter, format_notice

__all__ = ['NoticeRewriter', 'format_notice']
