"""
This package contains helpful mixin classes to provide basic functionality throughout fieldstars.
"""

from fieldstars.utilities.mixin_classes.attribute_printing import AttributePrinting
from fieldstars.utilities.mixin_classes.user_option_configured import UserOptionConfigured

__all__ = ["AttributePrinting", "UserOptionConfigured"]
