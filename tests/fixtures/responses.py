"""Server response fixtures."""

from typing import Dict, Any


def queue_response() -> Dict[str, Any]:
    """Queue body with a single pending tip."""
    return {
        "queue": [
            {
                "id": "1",
                "type": "tip",
                "content": "x",
                "priority": 1,
                "status": "pending",
                "createdAt": "2024-01-01T00:00:00.000Z"
            }
        ],
        "dailyPostCount": 2,
        "remainingPostsToday": 3
    }


def listing_posted_response() -> Dict[str, Any]:
    """Successful post-listing body with echoed listing and Facebook result."""
    return {
        "success": True,
        "message": "Listing posted",
        "queueId": "q_123",
        "generatedContent": "Just listed! 3 bed / 2 bath in Mission Hills.",
        "listing": {
            "id": "lst_1",
            "address": "123 Main St",
            "price": "$450,000",
            "city": "San Diego",
            "type": "House",
            "bedrooms": 3,
            "bathrooms": 2
        },
        "facebook": {
            "success": True,
            "postId": "1234567890_987654321",
            "message": "Published"
        }
    }


def tip_response() -> Dict[str, Any]:
    """Successful tip generation body."""
    return {
        "success": True,
        "generatedContent": "Tip: get pre-approved before you start touring homes."
    }
