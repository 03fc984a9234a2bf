"""
Colored logging utilities for the OAuth token proxy.

This module provides colored console logging with component identification,
timestamps, and message formatting so each token exchange can be followed
from the calling application, through the proxy, to the upstream provider.
"""

import logging
from datetime import datetime
from typing import Dict, Any, Optional
from enum import Enum

from colorama import Fore, Style, init

init(autoreset=True)  # Initialize colorama for Windows compatibility


class ComponentType(str, Enum):
    """Components that appear in proxy message flows."""
    CLIENT = "CLIENT"
    TOKEN_PROXY = "TOKEN-PROXY"
    PROVIDER = "PROVIDER"
    SYSTEM = "SYSTEM"


class MessageType(str, Enum):
    """Message types for logging."""
    REQUEST = "REQUEST"
    RESPONSE = "RESPONSE"
    ERROR = "ERROR"
    INFO = "INFO"
    TOKEN_EXCHANGE = "TOKEN-EXCHANGE"
    VALIDATION = "VALIDATION"
    PREFLIGHT = "PREFLIGHT"


class OAuthLogger:
    """
    Colored logger for token proxy message flows.

    Provides logging with color coding, timestamps, and structured message
    formatting. Secrets are redacted and codes/tokens are truncated before
    anything is printed.
    """

    def __init__(self, component_name: str):
        """
        Initialize logger for a specific component.

        Args:
            component_name: Name of the component (TOKEN-PROXY, PROVIDER, etc.)
        """
        self.component_name = component_name.upper()
        self.colors = self._get_component_colors()

        self.logger = logging.getLogger(f"oauth.{component_name.lower()}")
        self.logger.setLevel(logging.INFO)

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()

        handler = logging.StreamHandler()
        handler.setLevel(logging.INFO)
        self.logger.addHandler(handler)
        self.logger.propagate = False

    def _get_component_colors(self) -> Dict[str, str]:
        """Get color scheme for different components and message types."""
        return {
            'CLIENT': Fore.BLUE + Style.BRIGHT,
            'TOKEN-PROXY': Fore.GREEN + Style.BRIGHT,
            'PROVIDER': Fore.YELLOW + Style.BRIGHT,
            'SYSTEM': Fore.MAGENTA + Style.BRIGHT,
            'ERROR': Fore.RED + Style.BRIGHT,
            'SUCCESS': Fore.GREEN + Style.BRIGHT,
            'INFO': Fore.CYAN,
            'DEBUG': Fore.WHITE + Style.DIM,
            'HEADER': Fore.WHITE + Style.BRIGHT,
            'SEPARATOR': Fore.WHITE + Style.DIM,
            'RESET': Style.RESET_ALL
        }

    def _format_timestamp(self) -> str:
        """Format current timestamp for log messages."""
        return datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]

    def _sanitize_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Sanitize sensitive data for logging.

        Redacts secrets and authorization values, truncates long tokens.
        """
        sanitized = {}
        for key, value in data.items():
            key_lower = key.lower()

            if any(sensitive in key_lower for sensitive in ['secret', 'password', 'authorization']):
                sanitized[key] = '[REDACTED]'
            elif any(token in key_lower for token in ['token', 'code', 'verifier']):
                # Show first 10 characters of tokens/codes for debugging
                if isinstance(value, str) and len(value) > 10:
                    sanitized[key] = f"{value[:10]}..."
                else:
                    sanitized[key] = value
            else:
                sanitized[key] = value

        return sanitized

    def log_oauth_message(self,
                         source: str,
                         destination: str,
                         message_type: str,
                         data: Dict[str, Any],
                         success: bool = True):
        """
        Log a message flow entry with color coding and formatting.

        Args:
            source: Source component name
            destination: Destination component name
            message_type: Type of message (REQUEST, RESPONSE, etc.)
            data: Message data dictionary
            success: Whether the operation was successful
        """
        timestamp = self._format_timestamp()
        source_color = self.colors.get(source.upper(), self.colors['INFO'])
        dest_color = self.colors.get(destination.upper(), self.colors['INFO'])

        if not success:
            msg_color = self.colors['ERROR']
        elif message_type in ['RESPONSE', 'SUCCESS']:
            msg_color = self.colors['SUCCESS']
        else:
            msg_color = self.colors['INFO']

        header = f"{self.colors['HEADER']}[{timestamp}] {source_color}{source}{self.colors['RESET']} → {dest_color}{destination}{self.colors['RESET']}"
        print(header)

        print(f"{msg_color}{message_type}:{self.colors['RESET']}")

        sanitized_data = self._sanitize_data(data)
        for key, value in sanitized_data.items():
            print(f"  {self.colors['INFO']}{key}:{self.colors['RESET']} {value}")

        print(f"{self.colors['SEPARATOR']}{'-' * 60}{self.colors['RESET']}")
        print()

    def log_token_exchange(self,
                           provider: str,
                           stage: str,
                           details: Dict[str, Any],
                           success: bool = True):
        """
        Log one stage of a provider token exchange.

        Args:
            provider: Provider label (e.g. "MUSIC")
            stage: Exchange stage (request, upstream, response, ...)
            details: Stage details
            success: Whether the stage succeeded
        """
        data = {"provider": provider}
        data.update(details)

        self.log_oauth_message(
            source=self.component_name,
            destination=ComponentType.PROVIDER.value,
            message_type=f"{MessageType.TOKEN_EXCHANGE.value}-{stage.upper()}",
            data=data,
            success=success
        )

    def log_http_request(self,
                        method: str,
                        path: str,
                        params: Optional[Dict[str, Any]] = None,
                        headers: Optional[Dict[str, str]] = None):
        """
        Log HTTP request details.

        Args:
            method: HTTP method
            path: Request path
            params: Query parameters or form data
            headers: Request headers (sensitive headers will be redacted)
        """
        request_data = {
            "method": method,
            "path": path
        }

        if params:
            request_data["parameters"] = params

        if headers:
            safe_headers = {}
            for key, value in headers.items():
                if key.lower() in ['authorization', 'cookie', 'x-api-key']:
                    safe_headers[key] = '[REDACTED]'
                else:
                    safe_headers[key] = value
            request_data["headers"] = safe_headers

        self.log_oauth_message(
            source=ComponentType.CLIENT.value,
            destination=self.component_name,
            message_type="HTTP-REQUEST",
            data=request_data
        )

    def log_error(self,
                 error_type: str,
                 message: str,
                 details: Optional[Dict[str, Any]] = None):
        """
        Log error messages with context.

        Args:
            error_type: Type of error
            message: Error message
            details: Additional error context
        """
        error_data = {
            "error_type": error_type,
            "message": message
        }

        if details:
            error_data.update(details)

        self.log_oauth_message(
            source=self.component_name,
            destination="ERROR-HANDLER",
            message_type=MessageType.ERROR.value,
            data=error_data,
            success=False
        )

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Log informational messages.

        Args:
            message: Info message
            details: Additional context
        """
        print(f"{self.colors['INFO']}[{self._format_timestamp()}] {self.component_name}: {message}{self.colors['RESET']}")
        if details:
            for key, value in self._sanitize_data(details).items():
                print(f"  {key}: {value}")
        print()

    def log_startup(self, port: int, additional_info: Optional[Dict[str, Any]] = None):
        """
        Log component startup information.

        Args:
            port: Port number the component is running on
            additional_info: Additional startup information
        """
        print(f"{self.colors['SUCCESS']}🚀 {self.component_name} started on port {port}{self.colors['RESET']}")
        if additional_info:
            for key, value in additional_info.items():
                print(f"   {key}: {value}")
        print(f"{self.colors['SEPARATOR']}{'-' * 60}{self.colors['RESET']}")
        print()


def create_logger(component_name: str) -> OAuthLogger:
    """
    Factory function to create logger instances.

    Args:
        component_name: Name of the component

    Returns:
        OAuthLogger: Configured logger instance
    """
    return OAuthLogger(component_name)
