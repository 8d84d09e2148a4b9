TOOLS = [
  # ---- browser ----
  {
    "type": "function",
    "function": {
      "name": "browser_tool",
      "description": (
        "A browser automation tool for navigating, inspecting and interacting with web pages. "
        "Call page_inspect or ui_inspect after visit to find selectors before click or text_field_set."
      ),
      "parameters": {
        "type": "object",
        "properties": {
          "action": {
            "type": "string",
            "enum": ["visit", "page_inspect", "ui_inspect", "selector_inspect", "click", "text_field_set", "screenshot"]
          },
          "url": {"type": "string", "description": "URL to visit. Required for: visit"},
          "selector": {
            "type": "string",
            "description": "CSS selector. Required for: selector_inspect, click, text_field_set. Optional scope for ui_inspect"
          },
          "text": {"type": "string", "description": "Text to enter. Required for: text_field_set"},
          "text_content": {"type": "string", "description": "Visible text to search for. Required for: ui_inspect"},
          "context_size": {"type": "integer", "minimum": 0, "description": "Number of parent elements to show for each match", "default": 2},
          "summarize": {"type": "boolean", "description": "page_inspect: summarize interactive elements instead of returning HTML", "default": False}
        },
        "required": ["action"]
      }
    }
  },

  # ---- disk ----
  {
    "type": "function",
    "function": {
      "name": "disk_tool",
      "description": (
        "A tool for interacting with a system. It is able to list, create, delete, move and modify "
        "directories and files. Paths are relative to the tool's root directory."
      ),
      "parameters": {
        "type": "object",
        "properties": {
          "action": {
            "type": "string",
            "enum": [
              "directory_create", "directory_delete", "directory_move", "directory_list",
              "file_create", "file_delete", "file_move", "file_read", "file_write", "file_replace"
            ]
          },
          "path": {"type": "string", "description": "Relative path of the file or directory to act on"},
          "destination": {"type": "string", "description": "Target path. Required for: directory_move, file_move"},
          "text": {"type": "string", "description": "File contents. Required for: file_write"},
          "old_text": {"type": "string", "description": "Text to replace. Required for: file_replace"},
          "new_text": {"type": "string", "description": "Replacement text. Required for: file_replace"}
        },
        "required": ["action"]
      }
    }
  },

  # ---- database ----
  {
    "type": "function",
    "function": {
      "name": "database_tool",
      "description": (
        "Execute SQL statements in order. Stops at the first failing statement and returns "
        "one {status, statement, result} record per statement attempted."
      ),
      "parameters": {
        "type": "object",
        "properties": {
          "action": {"type": "string", "enum": ["execute"], "default": "execute"},
          "statements": {
            "type": "array",
            "items": {"type": "string"},
            "minItems": 1,
            "description": "SQL statements to execute"
          }
        },
        "required": ["statements"]
      }
    }
  },

  # ---- eval ----
  {
    "type": "function",
    "function": {
      "name": "eval_tool",
      "description": "Evaluate Python or Ruby code, or run a shell command. Every call asks the user first.",
      "parameters": {
        "type": "object",
        "properties": {
          "action": {"type": "string", "enum": ["python", "ruby", "shell"]},
          "code": {"type": "string", "description": "Source code. Required for: python, ruby"},
          "command": {"type": "string", "description": "Shell command. Required for: shell"}
        },
        "required": ["action"]
      }
    }
  },

  # ---- doc ----
  {
    "type": "function",
    "function": {
      "name": "doc_tool",
      "description": (
        "Read documents. pdf_read takes page_numbers such as \"5\", \"1, 3, 5\", \"1-10\" or \"1, 3-5, 10\"."
      ),
      "parameters": {
        "type": "object",
        "properties": {
          "action": {"type": "string", "enum": ["pdf_read", "text_read", "docx_read", "spreadsheet_read"]},
          "doc_path": {"type": "string", "description": "Path to the document"},
          "page_numbers": {"type": "string", "description": "Pages to read (first page is 1). Required for: pdf_read"},
          "sheet": {"type": "string", "description": "spreadsheet_read: sheet name (defaults to the first sheet)"},
          "max_rows": {"type": "integer", "minimum": 1, "description": "spreadsheet_read: maximum rows returned"}
        },
        "required": ["action", "doc_path"]
      }
    }
  },

  # ---- computer ----
  {
    "type": "function",
    "function": {
      "name": "computer_tool",
      "description": "A tool for interacting with a computer: keyboard, mouse, scrolling and waiting.",
      "parameters": {
        "type": "object",
        "properties": {
          "action": {
            "type": "string",
            "enum": [
              "key", "hold_key", "mouse_position", "mouse_move", "mouse_click",
              "mouse_double_click", "mouse_triple_click", "mouse_down", "mouse_up",
              "mouse_drag", "type", "scroll", "wait"
            ]
          },
          "text": {"type": "string", "description": "Key combination (xdotool syntax, e.g. \"ctrl+s\") or text to type"},
          "duration": {"type": "number", "minimum": 0, "description": "Seconds. Required for: hold_key, wait"},
          "coordinate": {
            "type": "object",
            "properties": {"x": {"type": "integer"}, "y": {"type": "integer"}},
            "required": ["x", "y"],
            "description": "Screen position. Required for mouse actions other than mouse_position"
          },
          "mouse_button": {"type": "string", "enum": ["left", "middle", "right"], "default": "left"},
          "scroll_direction": {"type": "string", "enum": ["up", "down", "left", "right"]},
          "scroll_amount": {"type": "integer", "minimum": 0}
        },
        "required": ["action"]
      }
    }
  },
]
