"""eksctl-wrap — create EKS clusters by driving the ``eksctl`` binary.

Installs missing tooling, translates flags into an ``eksctl create
cluster`` invocation and runs the post-provisioning installation step.
"""

from eksctl_wrap.version import __version__

__all__: list[str] = ["__version__"]
