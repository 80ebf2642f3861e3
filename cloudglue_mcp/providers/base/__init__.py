from .video_platform_provider import VideoPlatformProvider, TERMINAL_JOB_STATUSES

__all__ = [
    'VideoPlatformProvider',
    'TERMINAL_JOB_STATUSES',
]
