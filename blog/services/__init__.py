# Services package.
#
# Each module exposes a focused set of async functions over one aggregate:
#
#   user_service    : create users; resolve a user by username or id
#   post_service    : create / publish posts; flat post reads
#   comment_service : create comments; flat comment reads
#   feed_service    : nested post/comment graphs via blog.assembler
#
# All service functions accept an AsyncSession as their first argument.
# Writes run inside ``blog.database.atomic``; native store errors leave
# every function as one of the ``blog.errors`` kinds.
