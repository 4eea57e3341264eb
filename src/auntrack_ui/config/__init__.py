"""Configuration package for the Streamlit application"""
from .settings import config, AppConfig, load_timezone
from .env import env, EnvironmentConfig

__all__ = ['config', 'AppConfig', 'load_timezone', 'env', 'EnvironmentConfig']
