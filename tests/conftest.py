"""Shared fixtures for client aggregator tests."""

import logging
from collections.abc import Iterator

import pytest

from client_aggregator.models import SourceUnit

FOO_CLIENT_SOURCE = """\
# frozen_string_literal: true

module Line
  module Bot
    module V2
      module Foo
        class ApiClient
          # Checks that the Foo API is reachable.
          # @return [String]
          def ping
            @http_client.get(path: "/ping")
          end
        end
      end
    end
  end
end
"""

BAR_CLIENT_SOURCE = """\
# frozen_string_literal: true

module Line
  module Bot
    module V2
      module Bar
        class ApiClient
          # Sends a message.
          # @param msg [String] message text
          def send(msg:)
            @http_client.post(path: "/send", body: msg)
          end
        end
      end
    end
  end
end
"""

MESSAGING_API_CLIENT_SOURCE = """\
# frozen_string_literal: true

require 'json'

module Line
  module Bot
    module V2
      module MessagingApi
        class ApiClient
          # Initializes a new {Line::Bot::V2::MessagingApi::ApiClient} instance.
          #
          # @param base_url [String] The base URL for requests (optional).
          def initialize(base_url: nil, channel_access_token:, http_options: {})
            @http_client = HttpClient.new(base_url: base_url || 'https://api.line.me')
          end

          # Sends a message to multiple users at any time.
          # This requests to <code>POST https://api.line.me/v2/bot/message/broadcast</code>
          #
          # @param broadcast_request [BroadcastRequest]
          # @param x_line_retry_key [String, nil] Retry key.
          # @return [Array(Object, Integer, Hash{String => String})]
          def broadcast_with_http_info(broadcast_request:, x_line_retry_key: nil)
            path = "/v2/bot/message/broadcast"
            @http_client.post(path: path, body_params: broadcast_request)
          end

          # Get bot info
          # @return [BotInfoResponse]
          def get_bot_info
            @http_client.get(path: "/v2/bot/info")
          end

          # This comment is separated from its method by a blank line.

          def get_followers(start: nil, limit: nil)
            @http_client.get(path: "/v2/bot/followers/ids")
          end
        end
      end
    end
  end
end
"""

PLAIN_RUBY_SOURCE = """\
# A helper without the SDK module nesting.
module Helpers
  def shout(text)
    text.upcase
  end
end
"""


@pytest.fixture(autouse=True)
def isolate_logging() -> Iterator[None]:
    """Restore root and package logger state after each test.

    setup_logging() replaces root handlers with ones bound to the stream that
    was current at the time, which CliRunner closes after each invocation.
    """
    root = logging.getLogger()
    package = logging.getLogger("client_aggregator")
    saved = (root.level, list(root.handlers), package.level)
    yield
    root.setLevel(saved[0])
    root.handlers[:] = saved[1]
    package.setLevel(saved[2])


@pytest.fixture
def foo_unit() -> SourceUnit:
    """Source unit declaring submodule Foo with a documented `ping`."""
    return SourceUnit(file_path="lib/foo/api/foo_client.rb", source_text=FOO_CLIENT_SOURCE)


@pytest.fixture
def bar_unit() -> SourceUnit:
    """Source unit declaring submodule Bar with a documented `send(msg:)`."""
    return SourceUnit(file_path="lib/bar/api/bar_client.rb", source_text=BAR_CLIENT_SOURCE)


@pytest.fixture
def messaging_api_unit() -> SourceUnit:
    """Source unit shaped like the LINE Messaging API client."""
    return SourceUnit(
        file_path="lib/line/bot/v2/messaging_api/api/messaging_api_client.rb",
        source_text=MESSAGING_API_CLIENT_SOURCE,
    )


@pytest.fixture
def plain_unit() -> SourceUnit:
    """Source unit without the expected submodule nesting."""
    return SourceUnit(file_path="lib/helpers.rb", source_text=PLAIN_RUBY_SOURCE)
