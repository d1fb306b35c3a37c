"""
Connection tracking for the signaling server.

Handles:
- Connection id assignment
- Targeted message delivery
- Disconnect notifications
"""
