"""
通用的 API 客户端，封装 HTTP 请求逻辑。
"""
import json
import logging
from typing import Dict, Any, Optional

import requests

from intel_brief.llm.exception import LLMError, ProviderError, ProviderHTTPError


class ApiClient:
    """封装非流式 JSON POST。单次请求，不做重试。"""

    def __init__(self, default_timeout: Optional[float] = None):
        """
        Args:
            default_timeout: 请求超时时间（秒）。None 表示使用 requests 默认行为（不超时）。
        """
        self.logger = logging.getLogger('intel_brief.utils.api_client')
        self.default_timeout = default_timeout

    def post(self, url: str, headers: Dict[str, str], json_payload: Dict[str, Any],
             timeout: Optional[float] = None) -> Dict[str, Any]:
        """
        发送 POST 请求并返回 JSON 响应。

        Args:
            url: 请求 URL。
            headers: 请求头。
            json_payload: JSON 请求体。
            timeout: 请求超时时间（秒），覆盖 default_timeout。

        Returns:
            包含 JSON 响应内容的字典。

        Raises:
            ProviderHTTPError: 响应状态码不是 2xx，携带状态码和原始响应体。
            ProviderError: 连接失败、超时等传输错误。
            LLMError: 响应体不是有效的 JSON。
        """
        timeout = timeout if timeout is not None else self.default_timeout
        self.logger.debug(f"ApiClient: Sending POST to {url} (timeout={timeout})")
        try:
            response = requests.post(url, headers=headers, json=json_payload, timeout=timeout)
        except requests.exceptions.Timeout as e:
            self.logger.error(f"API request TIMEOUT ({timeout}s) for {url}: {e}", exc_info=True)
            raise ProviderError(f"Request timed out after {timeout}s: {e}", status_code=408) from e
        except requests.exceptions.RequestException as e:
            self.logger.error(f"API request failed for {url}: {e}", exc_info=True)
            raise ProviderError(f"API request failed: {e}") from e

        self.logger.debug(f"ApiClient: Received status code {response.status_code} from {url}")
        if not response.ok:
            body = response.text
            self.logger.error(f"API request to {url} failed with status {response.status_code}: {body[:500]}")
            raise ProviderHTTPError(response.status_code, body)

        try:
            return response.json()
        except (json.JSONDecodeError, ValueError) as e:
            self.logger.error(f"Failed to decode JSON response from {url}: {e}", exc_info=True)
            raise LLMError(f"Failed to decode JSON response: {e}", status_code=response.status_code) from e
