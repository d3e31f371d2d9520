"""MongoDB collection names. Existing data uses these exact names."""

USERS = "Users"
COURSES = "material-courses"
IMAGES = "images"
REVIEWS = "reviews"
CART = "Cart"
ORDERS = "order-summary"
FORUM_POSTS = "forum-posts"
FORUM_REPLIES = "forum-replies"
ENROLLMENTS = "enrollments"
PROGRESS = "UserCourseProgress"
TRANSACTIONS = "transactions"
LIVE_SESSIONS = "live-sessions"
SESSION_BOOKINGS = "session-bookings"
BOOKS = "material-books"

REQUIRED_COLLECTIONS = (
    USERS,
    COURSES,
    REVIEWS,
    CART,
    ORDERS,
    FORUM_POSTS,
    FORUM_REPLIES,
    IMAGES,
    ENROLLMENTS,
    PROGRESS,
    TRANSACTIONS,
    LIVE_SESSIONS,
    BOOKS,
    SESSION_BOOKINGS,
)
