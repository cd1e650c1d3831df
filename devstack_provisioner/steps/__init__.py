from .step_10_detect_distro import DetectDistroStep
from .step_20_install_console import InstallConsoleStep
from .step_30_install_database import InstallDatabaseStep
from .step_40_install_dev_services import InstallDevServicesStep
from .step_60_install_desktop_extras import InstallDesktopExtrasStep
from .step_70_configure_firewall import ConfigureFirewallStep
from .step_90_print_guidance import PrintGuidanceStep

__all__ = [
    "DetectDistroStep",
    "InstallConsoleStep",
    "InstallDatabaseStep",
    "InstallDevServicesStep",
    "InstallDesktopExtrasStep",
    "ConfigureFirewallStep",
    "PrintGuidanceStep",
]
