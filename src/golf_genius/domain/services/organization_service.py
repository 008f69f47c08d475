"""
Services for seasons, categories and directories.
"""

from ..models.organization import Category, Directory, Season
from .base_service import ResourceService


class SeasonService(ResourceService):
    resource_path = "/seasons"
    record_class = Season


class CategoryService(ResourceService):
    resource_path = "/categories"
    record_class = Category


class DirectoryService(ResourceService):
    resource_path = "/directories"
    record_class = Directory
