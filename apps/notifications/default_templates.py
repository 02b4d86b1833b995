"""Starter copy for every email type the platform sends."""

DEFAULT_TEMPLATES = {
    'ad_approval': (
        'Your ad for {{campaign_name}} has been approved',
        '<p>Hi {{client_name}},</p><p>Your ad for <strong>{{campaign_name}}</strong> was approved and will '
        'run from {{start_date}} to {{end_date}}.</p>',
    ),
    'ad_rejection': (
        'Your ad for {{campaign_name}} needs changes',
        '<p>Hi {{client_name}},</p><p>Your ad for <strong>{{campaign_name}}</strong> was not approved.</p>'
        '<p>Reason: {{rejection_reason}}</p>',
    ),
    'host_ad_approved': (
        'Your host ad "{{ad_name}}" has been approved',
        '<p>Hi {{host_name}},</p><p>Your ad <strong>{{ad_name}}</strong> is approved and ready to assign.</p>',
    ),
    'host_ad_rejected': (
        'Your host ad "{{ad_name}}" was rejected',
        '<p>Hi {{host_name}},</p><p>Your ad <strong>{{ad_name}}</strong> was rejected.</p>'
        '<p>Reason: {{rejection_reason}}</p>',
    ),
    'campaign_submitted': (
        'Campaign {{campaign_name}} submitted for review',
        '<p>Hi {{client_name}},</p><p>We received <strong>{{campaign_name}}</strong> and will review it shortly.</p>',
    ),
    'campaign_approved': (
        'Campaign {{campaign_name}} approved',
        '<p>Hi {{client_name}},</p><p><strong>{{campaign_name}}</strong> is approved and starts {{start_date}}.</p>',
    ),
    'campaign_rejected': (
        'Campaign {{campaign_name}} rejected',
        '<p>Hi {{client_name}},</p><p><strong>{{campaign_name}}</strong> was rejected.</p>'
        '<p>Reason: {{rejection_reason}}</p>',
    ),
    'campaign_expiring': (
        'Campaign {{campaign_name}} ends in {{days_remaining}} day(s)',
        '<p>Hi {{client_name}},</p><p><strong>{{campaign_name}}</strong> ends on {{end_date}}.</p>',
    ),
    'campaign_expired': (
        'Campaign {{campaign_name}} has ended',
        '<p>Hi {{client_name}},</p><p><strong>{{campaign_name}}</strong> finished on {{end_date}}.</p>',
    ),
    'campaign_paused': (
        'Campaign {{campaign_name}} paused',
        '<p>Hi {{client_name}},</p><p><strong>{{campaign_name}}</strong> is paused.</p>',
    ),
    'campaign_resumed': (
        'Campaign {{campaign_name}} resumed',
        '<p>Hi {{client_name}},</p><p><strong>{{campaign_name}}</strong> is running again.</p>',
    ),
    'campaign_purchased': (
        'New campaign: {{campaign_name}}',
        '<p>Hi {{admin_name}},</p><p>{{user_name}} ({{user_email}}) created <strong>{{campaign_name}}</strong> '
        'with a budget of ${{budget}}.</p>',
    ),
    'custom_ad_purchased': (
        'New custom ad order #{{order_id}}',
        '<p>Hi {{admin_name}},</p><p>{{user_name}} ({{user_email}}) ordered {{service_name}} '
        'for ${{total_amount}}.</p>',
    ),
    'new_client_signup': (
        'New client signup: {{user_email}}',
        '<p>Hi {{admin_name}},</p><p>{{user_name}} ({{user_email}}) just signed up.</p>',
    ),
    'daily_pending_review': (
        '{{total_pending}} item(s) awaiting review',
        '<p>Hi {{admin_name}},</p><ul><li>Client ads: {{pending_ads}}</li><li>Host ads: {{pending_host_ads}}</li>'
        '<li>Campaigns: {{pending_campaigns}}</li></ul><p><a href="{{review_url}}">Open the review queue</a></p>',
    ),
    'custom_ad_designer_assigned': (
        'A designer is working on order #{{order_id}}',
        '<p>Hi {{client_name}},</p><p>{{designer_name}} has been assigned to your custom ad.</p>',
    ),
    'custom_ad_proofs_ready': (
        'Proofs ready for order #{{order_id}}',
        '<p>Hi {{client_name}},</p><p>Version {{proof_version}} of your custom ad is ready for review.</p>',
    ),
    'custom_ad_completed': (
        'Your custom ad order #{{order_id}} is complete',
        '<p>Hi {{client_name}},</p><p>Your custom ad is finished. Thank you for your order.</p>',
    ),
    'custom_ad_rejected': (
        'Custom ad order #{{order_id}} could not be accepted',
        '<p>Hi {{client_name}},</p><p>Reason: {{rejection_reason}}</p>',
    ),
    'custom_ad_cancelled': (
        'Custom ad order #{{order_id}} cancelled',
        '<p>Hi {{client_name}},</p><p>Your custom ad order was cancelled.</p>',
    ),
    'custom_ad_changes_requested': (
        'Changes requested on order #{{order_id}}',
        '<p>Hi {{designer_name}},</p><p>{{client_name}} asked for changes:</p><p>{{feedback}}</p>',
    ),
    'custom_ad_approved': (
        'Custom ad order #{{order_id}} approved',
        '<p>Hi {{designer_name}},</p><p>{{client_name}} approved the design for order #{{order_id}}.</p>',
    ),
    'custom_ad_proof_rejected': (
        'Revision requested on proof v{{proof_version}}',
        '<p>Hi {{designer_name}},</p><p>{{client_name}} requested a revision:</p><p>{{feedback}}</p>',
    ),
}
