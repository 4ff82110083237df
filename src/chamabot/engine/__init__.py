"""Reply engines (local interpreter or remote webhook) behind one `ReplyEngine` interface."""
