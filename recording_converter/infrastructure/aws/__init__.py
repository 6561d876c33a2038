from .aws_config import AWSConfigManager, aws_config_manager

__all__ = ['AWSConfigManager', 'aws_config_manager']
