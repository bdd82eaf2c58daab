"""
awsctx

Context switcher for profiles in the AWS CLI credentials file. The active
profile is the one whose keys are mirrored into the reserved [default]
section.
"""

__version__ = "0.1.0"
