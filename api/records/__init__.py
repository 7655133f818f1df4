"""
Generic audited persistence shared by every tracked entity kind.
"""
