"""Package operators for uninstalling the packages of removed blocks."""

from stardestroyer.operators.base import PackageOperator, UninstallResult
from stardestroyer.operators.npm import NpmOperator

__all__ = ["NpmOperator", "PackageOperator", "UninstallResult"]
