#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Kalakriti Hub - 赛事目录
"""

REGISTRATION_FEE = 150

EVENT_CATALOG = {
    'art': {
        'title': 'Kalakriti Art Event',
        'registrationName': 'Art Competition',
        'code': 'A',
        'acceptedFiles': 'image/*',
        'description': 'Showcase your artistic skills and creativity through various mediums including paintings, sketches, digital art, and more.',
        'image': '/images/event-art.jpg',
        'pricing': [
            {'artworks': 1, 'price': 299},
            {'artworks': 2, 'price': 499},
            {'artworks': 3, 'price': 699},
        ],
        'guidelines': [
            'Artwork must be original and created within the last 12 months',
            'Digital submissions should be high-resolution JPEG/PNG files',
            'Physical artwork photos should be well-lit and clear',
            'Each artwork must include a title and brief description',
            'Content should be appropriate for general audiences',
        ],
    },
    'photography': {
        'title': 'Kalakriti Photography Event',
        'registrationName': 'Photography Competition',
        'code': 'P',
        'acceptedFiles': 'image/*',
        'description': 'Capture moments, tell stories, and showcase your photography skills across various categories and themes.',
        'image': '/images/event-photography.jpg',
        'pricing': [
            {'artworks': 1, 'price': 249},
            {'artworks': 2, 'price': 399},
            {'artworks': 3, 'price': 549},
        ],
        'guidelines': [
            'Photos must be taken within the last 12 months',
            'Basic editing is allowed, but heavily manipulated images should be submitted in the Digital Art category',
            'Minimum resolution of 3000px on the longest side',
            'Include camera and lens information if available',
            'Model releases may be required for recognizable people',
        ],
    },
    'mehndi': {
        'title': 'Kalakriti Mehndi Event',
        'registrationName': 'Mehndi Competition',
        'code': 'M',
        'acceptedFiles': 'image/*',
        'description': 'Demonstrate your mehndi application skills with intricate designs that blend traditional and contemporary styles.',
        'image': '/images/event-mehndi.jpg',
        'pricing': [
            {'artworks': 1, 'price': 249},
            {'artworks': 2, 'price': 399},
            {'artworks': 3, 'price': 549},
        ],
        'guidelines': [
            'Submit clear photographs of completed mehndi designs',
            'Include both close-up and full design images',
            'Natural henna must be used (no black henna or harmful chemicals)',
            'Provide information about the inspiration behind the design',
            'Self-application and application on models are both acceptable',
        ],
    },
    'rangoli': {
        'title': 'Kalakriti Rangoli Event',
        'registrationName': 'Rangoli Competition',
        'code': 'R',
        'acceptedFiles': 'image/*',
        'description': 'Create vibrant and intricate rangoli designs using traditional or innovative techniques and materials.',
        'image': '/images/event-rangoli.jpg',
        'pricing': [
            {'artworks': 1, 'price': 249},
            {'artworks': 2, 'price': 399},
            {'artworks': 3, 'price': 549},
        ],
        'guidelines': [
            'Submit photographs showing the complete rangoli design',
            'Include progress photos if possible',
            'Specify materials used in the creation',
            'Provide the approximate dimensions of the design',
            'Traditional and contemporary designs are both welcome',
        ],
    },
    'dance': {
        'title': 'Kalakriti Dance Event',
        'registrationName': 'Dance Competition',
        'code': 'D',
        'acceptedFiles': 'video/*',
        'description': 'Express yourself through movement and showcase your dance talents across various styles from classical to contemporary.',
        'image': '/images/event-dance.jpg',
        'pricing': [
            {'artworks': 1, 'price': 349},
            {'artworks': 2, 'price': 599},
            {'artworks': 3, 'price': 799},
        ],
        'guidelines': [
            'Submit a video recording of your performance (2-5 minutes)',
            'Ensure good lighting and clear visibility of movements',
            'Music should be clearly audible',
            'Provide information about the dance style and concept',
            'Appropriate costumes enhancing the performance are recommended',
        ],
    },
    'singing': {
        'title': 'Kalakriti Singing Event',
        'registrationName': 'Singing Competition',
        'code': 'S',
        'acceptedFiles': 'audio/*,video/*',
        'description': 'Showcase your vocal talent across different genres and styles in this premier singing competition.',
        'image': '/images/event-singing.jpg',
        'pricing': [
            {'artworks': 1, 'price': 299},
            {'artworks': 2, 'price': 499},
            {'artworks': 3, 'price': 699},
        ],
        'guidelines': [
            'Submit an audio or video recording of your performance (2-4 minutes)',
            'Cover songs and original compositions are both acceptable',
            'Ensure clear audio quality with minimal background noise',
            'Basic accompaniment is allowed but focus should be on vocals',
            'Provide information about the song selection and language',
        ],
    },
}


def get_event_details(event_type):
    """返回赛事详情，未知类型返回 None"""
    details = EVENT_CATALOG.get(event_type)
    if details is None:
        return None
    return dict(details, type=event_type, registrationFee=REGISTRATION_FEE)


def get_event_title(event_type):
    details = EVENT_CATALOG.get(event_type)
    return details['title'] if details else ''


def get_event_code(event_type):
    details = EVENT_CATALOG.get(event_type)
    return details['code'] if details else None


def get_artwork_price(event_type, number_of_artworks):
    """按作品数量查价格，不支持的数量返回 None"""
    details = EVENT_CATALOG.get(event_type)
    if not details:
        return None
    for tier in details['pricing']:
        if tier['artworks'] == number_of_artworks:
            return tier['price']
    return None


def list_events():
    """赛事摘要列表"""
    return [
        {
            'type': event_type,
            'title': details['title'],
            'description': details['description'],
            'image': details['image'],
        }
        for event_type, details in EVENT_CATALOG.items()
    ]
